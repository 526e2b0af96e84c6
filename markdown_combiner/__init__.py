"""
markdown_combiner: combines the markdown notes of a vault folder into one
document, optionally prefixed with the folder's directory tree.
"""
from markdown_combiner.combiner import CombineResult, CombineStatus, combine_folder, combine_vault
from markdown_combiner.naming import output_name, snake_case, suffix
from markdown_combiner.settings import Settings, load_settings, save_settings
from markdown_combiner.tree import render_directory_context, render_tree
from markdown_combiner.vault import FileNode, FolderNode, LocalVault
from markdown_combiner.walker import collect_documents

__version__ = "1.0.0"

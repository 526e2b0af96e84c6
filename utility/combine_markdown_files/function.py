# -*- coding: utf-8 -*-
"""
=========================================================================
 Lollms Function Call: Combine Markdown Files
=========================================================================
Description:
  Combines the markdown notes of a vault folder (or of the whole vault)
  into a single new markdown document written next to the sources.
  Optionally prefixes the output with the folder's directory structure
  and names the output with a timestamp or random suffix.
=========================================================================
"""
import asyncio
from typing import List

# Use Lollms imports
from lollms.function_call import FunctionCall, FunctionType
from lollms.app import LollmsApplication
from lollms.client_session import Client
from lollms.prompting import LollmsContextDetails
from lollms.config import TypedConfig, ConfigTemplate, BaseConfig
from ascii_colors import trace_exception

from markdown_combiner.combiner import combine_folder, combine_vault
from markdown_combiner.settings import (
    DEFAULT_RANDOM_CHARS,
    DEFAULT_RANDOM_LENGTH,
    DEFAULT_TIMESTAMP_FORMAT,
    MAX_RANDOM_LENGTH,
    MIN_RANDOM_LENGTH,
    SUFFIX_OPTIONS,
    SUFFIX_TIMESTAMP,
    Settings,
)
from markdown_combiner.vault import LocalVault


class CombineMarkdownFiles(FunctionCall):
    def __init__(self, app: LollmsApplication, client: Client):
        config_template = ConfigTemplate([
            {
                "name": "include_directory_context",
                "type": "bool",
                "value": True,
                "help": "Prepend the folder's directory structure to the combined document. When checked, an output is written even if the folder has no markdown files."
            },
            {
                "name": "filename_suffix",
                "type": "str",
                "value": SUFFIX_TIMESTAMP,
                "options": SUFFIX_OPTIONS,
                "help": "How the output file name is made unique: a timestamp or a random string."
            },
            {
                "name": "timestamp_format",
                "type": "str",
                "value": DEFAULT_TIMESTAMP_FORMAT,
                "help": "strftime pattern used by the 'timestamp' suffix. Invalid patterns fall back to the default."
            },
            {
                "name": "random_length",
                "type": "int",
                "value": DEFAULT_RANDOM_LENGTH,
                "min": MIN_RANDOM_LENGTH,
                "max": MAX_RANDOM_LENGTH,
                "help": "Number of characters of the 'random' suffix."
            },
            {
                "name": "random_chars",
                "type": "str",
                "value": DEFAULT_RANDOM_CHARS,
                "help": "Characters the 'random' suffix is drawn from."
            },
        ])
        static_parameters = TypedConfig(config_template, BaseConfig(config={}))

        super().__init__(
            function_name="combine_markdown_files",
            app=app,
            function_type=FunctionType.CLASSIC,
            client=client,
            static_parameters=static_parameters
        )
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        return Settings.from_dict(dict(self.static_parameters.config))

    def settings_updated(self):
        self.settings = self._load_settings()

    def update_context(self, context: LollmsContextDetails, constructed_context: List[str]) -> List[str]:
        return constructed_context

    def execute(self, context: LollmsContextDetails, **kwargs) -> str:
        """
        Combines the markdown files of ``folder_path`` (relative to
        ``vault_path``), or of the whole vault when no folder is given,
        and returns a short status message.
        """
        vault_path = kwargs.get("vault_path", "")
        folder_path = kwargs.get("folder_path", "")

        if not vault_path:
            self.app.error("Parameter 'vault_path' is missing.")
            return "Error: No vault path provided."

        try:
            vault = LocalVault(vault_path)
            if folder_path:
                self.app.info(f"Combining markdown files of '{folder_path}' in {vault.base_dir}")
                result = asyncio.run(combine_folder(vault, vault.get_folder(folder_path), self.settings))
            else:
                self.app.info(f"Combining all markdown files of {vault.base_dir}")
                result = asyncio.run(combine_vault(vault, self.settings))
        except KeyError as e:
            self.app.error(str(e))
            return f"Error: {e}"
        except OSError as e:
            self.app.error(f"Cannot open vault {vault_path}: {e}")
            return f"Error: Cannot open vault {vault_path}: {e}"
        except Exception as e:
            self.app.error(f"An unexpected error occurred while combining files: {e}")
            trace_exception(e)
            return f"Error: An unexpected error occurred: {e}"

        if not result.ok:
            self.app.warning(result.message)
        return result.message

"""
Command line entry point.

    python -m markdown_combiner VAULT_DIR [FOLDER] [--settings FILE]

Without FOLDER the whole vault is combined.
"""
import argparse
import asyncio
import sys

import ascii_colors as logging
from ascii_colors import ASCIIColors

from markdown_combiner.combiner import CombineStatus, combine_folder, combine_vault
from markdown_combiner.settings import SUFFIX_OPTIONS, Settings, load_settings
from markdown_combiner.vault import LocalVault

logger = logging.getLogger(__name__)

EXIT_CODES = {
    CombineStatus.COMBINED: 0,
    CombineStatus.DIRECTORY_ONLY: 0,
    CombineStatus.EMPTY: 1,
    CombineStatus.FAILED: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdown_combiner",
        description="Combine the markdown files of a vault folder into a single document.",
    )
    parser.add_argument("vault", help="Path to the vault directory")
    parser.add_argument("folder", nargs="?", default=None, help="Vault-relative folder to combine (default: whole vault)")
    parser.add_argument("--settings", default=None, help="YAML settings file")
    parser.add_argument("--no-context", action="store_true", help="Do not prepend the directory structure")
    parser.add_argument("--suffix", choices=SUFFIX_OPTIONS, default=None, help="Output file name suffix strategy")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.settings) if args.settings else Settings()
    if args.no_context:
        settings = settings.updated(include_directory_context=False)
    if args.suffix:
        settings = settings.updated(filename_suffix=args.suffix)

    try:
        vault = LocalVault(args.vault)
        if args.folder:
            result = asyncio.run(combine_folder(vault, vault.get_folder(args.folder), settings))
        else:
            result = asyncio.run(combine_vault(vault, settings))
    except (KeyError, OSError) as e:
        logger.error(f"Cannot open {args.folder or args.vault}: {e}")
        ASCIIColors.red(f"Error: {e}")
        return EXIT_CODES[CombineStatus.FAILED]

    if result.ok:
        ASCIIColors.green(result.message)
    elif result.status == CombineStatus.EMPTY:
        ASCIIColors.yellow(result.message)
    else:
        ASCIIColors.red(result.message)
    return EXIT_CODES[result.status]


if __name__ == "__main__":
    sys.exit(main())

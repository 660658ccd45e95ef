"""CLI for inspecting note sequences and creating notes at new addresses"""

import argparse
import sys
from typing import get_args

from loguru import logger

from zettelseq.config import settings
from zettelseq.domain.errors import SequenceError
from zettelseq.domain.sequence import Scheme
from zettelseq.ingestion.orchestrator import NoteCreator
from zettelseq.note_store.local import LocalNoteStore
from zettelseq.sequences import (
    Relation,
    convert,
    get_relative,
    new_child,
    new_root,
    new_sibling,
    split,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--notes-dir",
        type=str,
        required=False,
        help="Folder containing the notes",
        default=str(settings.notes_dir),
    )
    parser.add_argument(
        "--scheme",
        type=Scheme,
        choices=list(Scheme),
        required=False,
        help="Sequence scheme of the notes",
        default=settings.scheme,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    split_parser = subparsers.add_parser("split", help="Print the components of an address")
    split_parser.add_argument("address")

    convert_parser = subparsers.add_parser("convert", help="Convert an address to another scheme")
    convert_parser.add_argument("address")
    convert_parser.add_argument("--to", type=Scheme, choices=list(Scheme), required=True)

    for name, help_text in [
        ("child", "Print the next free child address"),
        ("sibling", "Print the next free sibling address"),
    ]:
        subparsers.add_parser(name, help=help_text).add_argument("target")
    subparsers.add_parser("root", help="Print the next free top-level address")

    relatives_parser = subparsers.add_parser("relatives", help="List relatives of an address")
    relatives_parser.add_argument("target")
    relatives_parser.add_argument(
        "--relation",
        choices=get_args(Relation),
        default="children",
    )

    for name, help_text in [
        ("create-child", "Create a note at the next free child address"),
        ("create-sibling", "Create a note at the next free sibling address"),
    ]:
        create_parser = subparsers.add_parser(name, help=help_text)
        create_parser.add_argument("target")
        create_parser.add_argument("--title", type=str, default="")
        create_parser.add_argument("--keyword", action="append", dest="keywords", default=[])

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    scheme = args.scheme
    store = LocalNoteStore(
        args.notes_dir,
        extensions=settings.note_extensions,
        claim_timeout=settings.claim_timeout,
    )

    try:
        if args.command == "split":
            print("\n".join(split(scheme, args.address).components))
        elif args.command == "convert":
            print(convert(args.address, args.to))
        elif args.command in ("create-child", "create-sibling"):
            creator = NoteCreator(
                store=store,
                scheme=scheme,
                max_attempts=settings.allocation_attempts,
                extension=settings.note_extension,
            )
            create = (
                creator.create_child if args.command == "create-child" else creator.create_sibling
            )
            print(create(args.target, args.title, args.keywords).path)
        else:
            collection = NoteCreator(store=store, scheme=scheme).snapshot()
            if args.command == "child":
                print(new_child(args.target, collection, scheme))
            elif args.command == "sibling":
                print(new_sibling(args.target, collection, scheme))
            elif args.command == "root":
                print(new_root(collection, scheme))
            else:
                print("\n".join(get_relative(args.relation, args.target, collection, scheme)))
    except SequenceError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
    sys.exit(main())

import logging
import sys

from gitlite.config import Config
from gitlite.errors import GitError, InvalidArgs
from gitlite.models import Git
from gitlite.utils import get_parser

EXIT_FATAL = 9

logger = logging.getLogger(__name__)


def run(git: Git, args):
    match args.command:
        case "init":
            return git.init_repo()
        case "cat-file":
            return git.cat_file(
                args.hash,
                show_type=args.show_type,
                show_size=args.show_size,
                pretty_print=args.pretty_print,
            )
        case "hash-object":
            return git.hash_object(args.path, write=args.write)
        case "ls-tree":
            return git.ls_tree(args.hash_value, name_only=args.name_only)
        case "write-tree":
            return git.write_tree()
        case None:
            raise InvalidArgs("missing command")
        case _:
            raise InvalidArgs(f"invalid command: {args.command}")


def main(argv=None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        git = Git(Config.from_env())
        run(git, args)
    except GitError as exc:
        logger.debug("%s failed with %s", args.command, exc.kind)
        sys.stderr.write(f"fatal: {exc.message}\n")
        return EXIT_FATAL
    return 0


if __name__ == "__main__":
    sys.exit(main())

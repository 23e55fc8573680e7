import logging # logging setup
logging.basicConfig(
level=logging.WARNING, # DEBUG, INFO, WARNING, ERROR, CRITICAL
format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

import sys

from toyl.channels import open_channels
from toyl.classes import Constants, ToylSystemConfig
from toyl.errors import ToylSyntaxError
from toyl.interpreter import ToylInterpreter
from toyl.renderer import TreeRenderer

USAGE = """usage:
  toyl run [SOURCE] [--config FILE]   run SOURCE (default from config) into out/tree/error files
  toyl tree SOURCE                    print the tree of every top-level statement, run nothing
  toyl repl [--config FILE]           interactive shell (default)
"""


def read_source(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def cmd_run(path, config):
    path = path or config.files["source"]
    try:
        source = read_source(path)
    except OSError as e:
        print(f"Error: cannot read {path}: {e}")
        return 1

    interp = ToylInterpreter()
    with open_channels(config.files) as channels:
        errors = interp.execute(source, channels)
    logger.info(f"run {path}: {errors} error(s)")
    return 0


def cmd_tree(path):
    try:
        source = read_source(path)
    except OSError as e:
        print(f"Error: cannot read {path}: {e}")
        return 1

    try:
        program = ToylInterpreter().build_program(source)
    except ToylSyntaxError as e:
        print(f"Error: {e}")
        return 1

    renderer = TreeRenderer(sys.stdout)
    for stmt in program.body:
        renderer.render(stmt)
    return 0


def _pop_option(args, name):
    if name not in args:
        return None
    i = args.index(name)
    if i + 1 >= len(args):
        raise ValueError(f"{name} needs a value")
    value = args[i + 1]
    del args[i:i + 2]
    return value


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config_path = _pop_option(args, "--config") or Constants.CONFIG_FILE
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 2
    config = ToylSystemConfig.load(config_path)

    command = args.pop(0) if args else "repl"
    if command == "run" and len(args) <= 1:
        return cmd_run(args[0] if args else None, config)
    if command == "tree" and len(args) == 1:
        return cmd_tree(args[0])
    if command == "repl" and not args:
        from toyl.repl import ToylShell
        try:
            ToylShell(config).cmdloop()
        except KeyboardInterrupt:
            print("\nGoodbye.")
        return 0

    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main())

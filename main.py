import sys

import reins
from reins.logging import configure_logging, get_logger

logger = get_logger("main")


def copy(arguments):
    source, target = arguments
    logger.info("copying", source=source, target=target, retries=reins.get_flag("retries", int), force=reins.get_flag("force", bool))
    return 0


def echo(arguments):
    print(reins.get_flag("prefix", str), *arguments)


reins.set_version("0.0.0")
reins.set_help_banner("reins demo: copy files and echo words")
reins.set_delimiters(["+"])

reins.define_global_flag("retries", "how many times to retry", 3, lambda retries: retries > 0)
reins.define_action("copy", 2, False, "copy a file", "copy SOURCE TARGET", copy)
reins.define_action_flag("copy", "f force", "overwrite the target", False)
reins.define_action("echo", 0, True, "print its arguments", "echo [WORD ...]", echo)
reins.define_action_flag("echo", "prefix", "text printed before the words", ">")


if __name__ == '__main__':
    match reins.parse(sys.argv):
        case reins.PARSE_OK:
            configure_logging(verbose=reins.get_flag("verbose"), vlevel=reins.get_flag("vlevel"))
            sys.exit(reins.start())
        case reins.PARSE_HELP:
            reins.show_help()
        case reins.PARSE_VERSION:
            reins.show_version()
        case _:
            reins.show_fault(reins.current().fault)
            sys.exit(2)

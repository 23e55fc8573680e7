"""
Shared constants, the run configuration and the pygments lexer for toyl.

"""
import configparser
from typing import Dict

from pygments.lexer import RegexLexer, words
from pygments.token import Keyword, Name, Number, Operator, Punctuation, Comment, Text
from rich.console import Console

import logging
logger = logging.getLogger(__name__)

console = Console()


# ===== Constants =====
class Constants:
    """Constants"""
    CONFIG_FILE = "config.ini"

    DEFAULT_ECHO = "Yes"
    DEFAULT_TRACE = "No"
    DEFAULT_LOG = "No"

    DEFAULT_FILES = {
        "source": "in.txt",
        "out": "out.txt",
        "tree": "tree.txt",
        "error": "outError.txt",
    }

    """Symbol store and tree layout"""
    MAX_VARIABLES = 256
    SPACING_PER_LEVEL = 5
    SEPARATOR = "\n" + "-" * 50 + "\n\n"

    """Reserved words"""
    KEYWORD = ("int", "print", "if", "else", "end")

    """Error messages"""
    ERR_DIV_ZERO = "Division by zero"
    ERR_UNKNOWN_OP = "Unknown operator"
    ERR_NOT_EXPR = "expected expression node"
    ERR_DECL_TARGET = "Declaration left side is not a variable"
    ERR_ASSIGN_TARGET = "Assignment left side is not a variable"
    ERR_IF_BRANCHES = "If branches malformed"
    ERR_UNKNOWN_STMT = "Unknown statement kind"
    ERR_SYNTAX = "syntax error"
    ERR_CHARACTER = "unexpected character {char!r}"
    ERR_TOO_MANY_VARS = "too many variables"
    ERR_ALREADY_RAN = "program has already been executed"


_YES = ("1", "on", "true", "yes")
_NO = ("0", "off", "false", "no")


def boolean_setter(key_name: str):
    """
    Decorator turning 1/0, on/off, true/false, yes/no into Yes/No for ``key_name``.
    Anything else is stored as given.
    """
    def decorator(func):
        def wrapper(self, value):
            s_val = str(value).strip().strip('"').lower()
            if s_val in _NO:
                final_val = "No"
            elif s_val in _YES:
                final_val = "Yes"
            else:
                final_val = value

            self.env[key_name] = final_val
            return f"{key_name} mode: {self.env.get(key_name)}"
        wrapper.__doc__ = func.__doc__
        return wrapper
    return decorator


# ===== Run configuration =====
class ToylSystemConfig:
    """Settings of the shell and the file names used by ``toyl run``."""

    def __init__(self):
        self.env = {
            "Echo": Constants.DEFAULT_ECHO,
            "Trace": Constants.DEFAULT_TRACE,
            "Log": Constants.DEFAULT_LOG,
        }
        self.files: Dict[str, str] = dict(Constants.DEFAULT_FILES)

    @classmethod
    def load(cls, path: str = Constants.CONFIG_FILE) -> "ToylSystemConfig":
        """Read ``path``; missing files, sections and keys keep their defaults."""
        config = cls()
        ini = configparser.ConfigParser()
        if not ini.read(path, encoding="utf-8"):
            logger.debug(f"config: {path} not found, using defaults")
            return config

        if ini.has_section("Files"):
            for key in config.files:
                config.files[key] = ini["Files"].get(key, config.files[key]).strip('"')

        if ini.has_section("ENV"):
            for key in config.env:
                if key in ini["ENV"]:
                    getattr(config, f"set_{key}")(ini["ENV"][key])

        logger.debug(f"config: env={config.env} files={config.files}")
        return config

    @boolean_setter("Echo")
    def set_Echo(self, value):
        """Print effects in the shell"""
        pass

    @boolean_setter("Trace")
    def set_Trace(self, value):
        """Print the tree of every executed statement in the shell"""
        pass

    @boolean_setter("Log")
    def set_Log(self, value):
        """Debug logging"""
        pass

    def is_on(self, key: str) -> bool:
        return self.env.get(key) == "Yes"


class ToylLexer(RegexLexer):
    name = 'toyl'
    aliases = ['toyl']
    filenames = ['*.toyl']

    tokens = {
        'root': [
            (r'//.*', Comment.Single),
            (words(Constants.KEYWORD, suffix=r'\b'), Keyword),
            (r'\d+', Number.Integer),
            (r'==|!=|<=|>=|<|>|=|\+|-|\*|/', Operator),
            (r'[();:]', Punctuation),
            (r'[A-Za-z_][A-Za-z0-9_]*', Name.Variable),
            (r'\s+', Text),
        ]
    }

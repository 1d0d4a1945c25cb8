"""tinyshell - a small interactive shell with quoting and output redirection."""

__version__ = "0.1.0"

"""Classify a tokenized line into one of the shell's command variants."""

from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Echo:
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Pwd:
    # Trailing words only carry a redirection suffix.
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Type:
    name: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Cd:
    path: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class External:
    program: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Empty:
    """A builtin that needs an operand but got none; does nothing."""


Command: TypeAlias = Exit | Echo | Pwd | Type | Cd | External | Empty


def parse(words: list[str]) -> Command:
    """Build a command from its words; the first word picks the variant.

    Raises ValueError if ``words`` is empty.
    """
    match words:
        case []:
            raise ValueError("cannot parse an empty command")
        case ["exit", *_]:
            return Exit()
        case ["echo", *args]:
            return Echo(args)
        case ["pwd", *args]:
            return Pwd(args)
        case ["type", name, *args]:
            return Type(name, args)
        case ["cd", path, *args]:
            return Cd(path, args)
        case ["type" | "cd"]:
            return Empty()
        case [program, *args]:
            return External(program, args)

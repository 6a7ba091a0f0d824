from typing import Self

from pydantic import BaseModel, ConfigDict

from aptarchive.errors import MalformedFieldError

WILDCARDS = {"all", "any"}

DEFAULT_ABI = "gnu"
DEFAULT_OS = "linux"


class Architecture(BaseModel):
    """A Debian architecture tuple, e.g. ``amd64`` or ``musl-linux-arm64``."""

    model_config = ConfigDict(frozen=True)

    abi: str = DEFAULT_ABI
    os: str = DEFAULT_OS
    cpu: str

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse ``cpu``, ``os-cpu`` or ``abi-os-cpu``."""
        text = text.strip()
        if text in WILDCARDS:
            return cls(abi=text, os=text, cpu=text)

        parts = text.split("-", 2)
        if not all(parts):
            raise MalformedFieldError(text, "empty architecture component")
        match parts:
            case [cpu]:
                return cls(cpu=cpu)
            case [os, cpu]:
                return cls(os=os, cpu=cpu)
            case [abi, os, cpu]:
                return cls(abi=abi, os=os, cpu=cpu)
        raise MalformedFieldError(text)

    @property
    def is_wildcard(self) -> bool:
        return self.cpu in WILDCARDS and self.abi == self.os == self.cpu

    def __str__(self) -> str:
        if self.is_wildcard:
            return self.cpu
        # an OS-qualified wildcard such as linux-any keeps its OS
        if self.abi == DEFAULT_ABI and self.os == DEFAULT_OS and self.cpu not in WILDCARDS:
            return self.cpu
        if self.abi == DEFAULT_ABI:
            return f"{self.os}-{self.cpu}"
        return f"{self.abi}-{self.os}-{self.cpu}"


def parse_architectures(value: str) -> list[Architecture]:
    """Parse a whitespace-separated architecture list."""
    return [Architecture.parse(token) for token in value.split()]

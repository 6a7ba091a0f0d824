"""Exceptions raised by the archive model."""


class ArchiveError(Exception):
    """Base class for every error raised by aptarchive."""


class MalformedFieldError(ArchiveError, ValueError):
    """A compound control field does not match its grammar."""

    def __init__(self, raw: str, reason: str | None = None):
        self.raw = raw
        self.reason = reason
        message = f"Malformed field: {raw!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class StanzaDecodeError(ArchiveError):
    """A stanza could not be decoded into a typed record."""


class StanzaEncodeError(ArchiveError):
    """A record could not be serialized back into a stanza."""


class NoSuchArchError(ArchiveError, LookupError):
    """No packages are registered for a component/architecture pair."""

    def __init__(self, component: str, arch):
        self.component = component
        self.arch = arch
        super().__init__(f"No such arch: '{arch}' in component '{component}'")


class UnsupportedAlgorithmError(ArchiveError, ValueError):
    """A digest family name is not in the supported set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported hash algorithm: {name!r}")

class LauncherError(Exception):
    """Base class for pool launcher errors."""


class MalformedRecordError(LauncherError, ValueError):
    """On-chain account data that cannot be decoded into a valid record."""


class LedgerQueryError(LauncherError):
    """An RPC query returned no usable response."""


class NoMatchingConfigError(LauncherError):
    """No pool config satisfies the requirement; pool creation is aborted."""

    def __init__(self, requirement):
        self.requirement = requirement
        super().__init__(f"No pool config with vault support matches {requirement!r}")

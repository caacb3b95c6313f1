class ZipperError(Exception):
    pass


class ConfigError(ZipperError):
    pass


class UserAbort(ZipperError):
    pass


class SetupError(ZipperError):
    pass


class CopyError(ZipperError):
    def __init__(self, path, reason=""):
        self.path = path
        msg = f"Failed to copy '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DependencyToolMissing(ZipperError):
    pass


class DependencyInstallError(ZipperError):
    def __init__(self, returncode, output=""):
        self.returncode = returncode
        self.output = output
        msg = f"Composer production dependency installation failed (rc={returncode})."
        tail = output.strip()[-2000:]
        if tail:
            msg += "\n" + tail
        super().__init__(msg)


class ArchiveError(ZipperError):
    pass

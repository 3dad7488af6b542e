from .const import ERRORS


class RmexifError(ValueError):
    code = "E_READ"

    def __init__(self, detail: str = "", offset: int | None = None, path: str | None = None):
        self.detail = detail
        self.offset = offset
        self.path = path
        msg = ERRORS[self.code]
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    def to_dict(self) -> dict:
        err = {"code": self.code, "message": ERRORS[self.code]}
        if self.detail:
            err["detail"] = self.detail
        if self.offset is not None:
            err["offset"] = self.offset
        if self.path is not None:
            err["path"] = self.path
        return err


class ReadError(RmexifError):
    code = "E_READ"


class ShortReadError(RmexifError):
    code = "E_READ_SHORT"


class AllocationError(RmexifError):
    code = "E_ALLOC"


class UnsupportedSegmentError(RmexifError):
    code = "E_UNSUPPORTED_MARKER"


class TruncatedSegmentError(RmexifError):
    code = "E_TRUNCATED"


class BadLengthError(RmexifError):
    code = "E_BAD_LENGTH"


class WriteError(RmexifError):
    code = "E_WRITE"

class ConversionError(Exception):
    """Structural failure detected before the pipeline mutates anything."""

    code = "ConversionError"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class NotStafFile(ConversionError):
    code = "NotStafFile"

    def __init__(self, message: str = "This file doesn't seem to be a valid STAF file"):
        super().__init__(message)


class InvalidParameter(ConversionError):
    code = "InvalidParameter"

"""Exceptions raised by the package."""


class StreamError(Exception):
    """Base class for errors reported by metrics and their cores."""


class MultiError(StreamError):
    """Several errors gathered together under one context message."""

    def __init__(self, message, errors):
        self.message = message
        self.errors = list(errors)
        super().__init__(message, self.errors)

    def __str__(self):
        if len(self.errors) == 1:
            body = f"1 error occurred:\n\t* {self.errors[0]}\n\n"
        else:
            points = "\n\t".join(f"* {err}" for err in self.errors)
            body = f"{len(self.errors)} errors occurred:\n\t{points}\n\n"
        if self.message:
            return f"{self.message}: {body}"
        return body
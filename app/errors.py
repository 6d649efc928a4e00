"""Errors raised by the record-store adapters."""


class RecordStoreError(Exception):
    """The record store could not be configured or reached."""


class UnsupportedOperatorError(RecordStoreError):
    def __init__(self, operator: str):
        super().__init__(f"Unsupported filter operator: {operator!r}")
        self.operator = operator

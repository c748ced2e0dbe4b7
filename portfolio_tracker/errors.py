"""Errors raised by the price store."""


class PriceStoreError(Exception):
    """Base exception for price store errors."""

    pass


class DuplicateKeyError(PriceStoreError):
    """A row for this (ticker, date) pair already exists."""

    def __init__(self, ticker, date):
        self.ticker = ticker
        self.date = date
        super().__init__(f"Price already recorded for {ticker} on {date}")


class MissingFieldError(PriceStoreError):
    """A required field was absent, or an empty ticker/date was given."""

    def __init__(self, fields):
        self.fields = tuple(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class InvalidFieldError(PriceStoreError):
    """A field had a value of the wrong type."""

    pass


class SchemaConflictError(PriceStoreError):
    """An existing prices table does not match the expected definition."""

    def __init__(self, table, problems):
        self.table = table
        self.problems = list(problems)
        super().__init__(
            f"Existing table '{table}' is incompatible: {'; '.join(self.problems)}"
        )

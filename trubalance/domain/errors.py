# trubalance/domain/errors.py
"""
Errors raised by the financial calculators.

All of them derive from ``CalculatorError`` (a ``ValueError``) so the API
layer can turn any refused calculation into a single 400 response.
"""


class CalculatorError(ValueError):
    """A calculator refused to produce a result for the given input."""


class InvalidInputError(CalculatorError):
    """Bad or missing GST / categorizer input (state, amount, rate, type)."""


class InvalidLineItemError(CalculatorError):
    """Line item with bad quantity/rate/discount/GST rate or a negative total."""


class InvalidIncomeError(CalculatorError):
    """Budget allocation requested for a non-positive monthly income."""


class MalformedInvoiceNumberError(CalculatorError):
    """Existing invoice number does not follow ``INV-YYYY-NNNN``."""

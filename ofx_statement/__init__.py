"""Parses OFX 1.x (SGML) bank and credit card statements into typed records.

    from ofx_statement import parse_ofx

    document = parse_ofx(text)
    for trn in document.body.credit_card.transaction_response.statement \\
            .bank_transactions.transactions:
        print(trn.date_posted, trn.amount, trn.name)

All failures raise `OfxError` (a `ValueError`).
"""

from .document import Document, load_ofx_file, parse_ofx
from .errors import OfxError
from .header import Header
from .body import Body

__all__ = [
    'Body',
    'Document',
    'Header',
    'OfxError',
    'load_ofx_file',
    'parse_ofx',
]

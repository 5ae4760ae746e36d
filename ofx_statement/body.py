"""Typed model of the OFX 1.x `<OFX>` body.

Only the signon, bank statement and credit card statement message sets are
modelled.  Each record is a frozen dataclass; its `ofx_field` declarations are
the mapping from OFX tags to fields (see `schema.project`).
"""

from typing import Optional, Tuple
import dataclasses
import datetime
import enum
import logging

from beancount.core.number import Decimal

from .schema import (Language, ofx_field, parse_decimal, parse_language,
                     parse_unsigned, project)
from .tag_tree import TagNode
from .timestamp import parse_ofx_time

logger = logging.getLogger('ofx_body')

record = dataclasses.dataclass(frozen=True)


class TransactionType(enum.Enum):
    CREDIT = 'CREDIT'
    DEBIT = 'DEBIT'
    INTEREST = 'INT'
    DIVIDEND = 'DIV'
    FEE = 'FEE'
    SERVICE_CHARGE = 'SRVCHG'
    DEPOSIT = 'DEP'
    ATM = 'ATM'
    POINT_OF_SALE = 'POS'
    TRANSFER = 'XFER'
    CHECK = 'CHECK'
    PAYMENT = 'PAYMENT'
    CASH = 'CASH'
    DIRECT_DEPOSIT = 'DIRECTDEP'
    DIRECT_DEBIT = 'DIRECTDEBIT'
    REPEAT_PAYMENT = 'REPEATPMT'
    OTHER = 'OTHER'


# 11.3.1.2 Account Types for <ACCTTYPE> and <ACCTTYPE2> Elements
class AccountType(enum.Enum):
    CHECKING = 'CHECKING'
    SAVINGS = 'SAVINGS'
    MONEYMRKT = 'MONEYMRKT'
    CREDITLINE = 'CREDITLINE'
    CMA = 'CMA'


@record
class Status:
    code: int = ofx_field(parse_unsigned)
    severity: str = ofx_field(str)


@record
class Balance:
    # Kept as text: some institutions use non-canonical number formatting.
    amount: str = ofx_field(str, tag='BALAMT')
    date: datetime.datetime = ofx_field(parse_ofx_time, tag='DTASOF')


@record
class Currency:
    rate: Decimal = ofx_field(parse_decimal, tag='CURRATE')
    symbol: str = ofx_field(str, tag='CURSYM')


@record
class Transaction:
    transaction_type: TransactionType = ofx_field(TransactionType,
                                                  tag='TRNTYPE')
    date_posted: datetime.datetime = ofx_field(parse_ofx_time, tag='DTPOSTED')
    amount: Decimal = ofx_field(parse_decimal, tag='TRNAMT')
    # FITID is the institution's unique id, used to de-duplicate imports.
    id: str = ofx_field(str, tag='FITID')
    name: Optional[str] = ofx_field(str, optional=True)
    memo: Optional[str] = ofx_field(str, optional=True)
    currency: Optional[Currency] = ofx_field(Currency, optional=True)


@record
class BankTransactionList:
    """Transactions in document order.

    The range dates are left unparsed since institutions use inconsistent
    precision for them.
    """
    dtstart: Optional[str] = ofx_field(str, optional=True)
    dtend: Optional[str] = ofx_field(str, optional=True)
    transactions: Tuple[Transaction, ...] = ofx_field(
        Transaction, tag='STMTTRN', repeated=True)


@record
class Account:
    id: str = ofx_field(str, tag='ACCTID')


@record
class BankAccount:
    bank_id: str = ofx_field(str, tag='BANKID')
    id: str = ofx_field(str, tag='ACCTID')
    account_type: AccountType = ofx_field(AccountType, tag='ACCTTYPE')


@record
class FinancialInstitution:
    organization: str = ofx_field(str, tag='ORG')
    id: Optional[str] = ofx_field(str, tag='FID', optional=True)


@record
class SignOnResponse:
    status: Status = ofx_field(Status)
    server_date: datetime.datetime = ofx_field(parse_ofx_time, tag='DTSERVER')
    language: Language = ofx_field(parse_language)
    financial_institution: Optional[FinancialInstitution] = ofx_field(
        FinancialInstitution, tag='FI', optional=True)


@record
class SignOnMessageResponse:
    response: SignOnResponse = ofx_field(SignOnResponse, tag='SONRS')


@record
class CreditCardStatementResponse:
    currency: str = ofx_field(str, tag='CURDEF')
    account: Account = ofx_field(Account, tag='CCACCTFROM')
    bank_transactions: Optional[BankTransactionList] = ofx_field(
        BankTransactionList, tag='BANKTRANLIST', optional=True)
    ledger_balance: Balance = ofx_field(Balance, tag='LEDGERBAL')
    available_balance: Optional[Balance] = ofx_field(
        Balance, tag='AVAILBAL', optional=True)


@record
class CreditCardStatementTransactionResponse:
    transaction_id: str = ofx_field(str, tag='TRNUID')
    status: Status = ofx_field(Status)
    statement: CreditCardStatementResponse = ofx_field(
        CreditCardStatementResponse, tag='CCSTMTRS')


@record
class CreditCardMessageResponse:
    transaction_response: CreditCardStatementTransactionResponse = ofx_field(
        CreditCardStatementTransactionResponse, tag='CCSTMTTRNRS')


# Unlike credit card statements, the account and ledger balance are optional
# here: partial bank exports omitting them are common.
@record
class StatementResponse:
    currency: str = ofx_field(str, tag='CURDEF')
    account: Optional[BankAccount] = ofx_field(
        BankAccount, tag='BANKACCTFROM', optional=True)
    bank_transactions: Optional[BankTransactionList] = ofx_field(
        BankTransactionList, tag='BANKTRANLIST', optional=True)
    ledger_balance: Optional[Balance] = ofx_field(
        Balance, tag='LEDGERBAL', optional=True)
    available_balance: Optional[Balance] = ofx_field(
        Balance, tag='AVAILBAL', optional=True)


@record
class StatementTransactionResponse:
    transaction_id: str = ofx_field(str, tag='TRNUID')
    status: Status = ofx_field(Status)
    statement: StatementResponse = ofx_field(StatementResponse, tag='STMTRS')


@record
class BankMessageResponse:
    transaction_response: StatementTransactionResponse = ofx_field(
        StatementTransactionResponse, tag='STMTTRNRS')


@record
class Body:
    sign_on: Optional[SignOnMessageResponse] = ofx_field(
        SignOnMessageResponse, tag='SIGNONMSGSRSV1', optional=True)
    credit_card: Optional[CreditCardMessageResponse] = ofx_field(
        CreditCardMessageResponse, tag='CREDITCARDMSGSRSV1', optional=True)
    bank: Optional[BankMessageResponse] = ofx_field(
        BankMessageResponse, tag='BANKMSGSRSV1', optional=True)


def parse_body(root: TagNode) -> Body:
    body = project(root, Body)
    logger.debug('projected body: sign_on=%s credit_card=%s bank=%s',
                 body.sign_on is not None, body.credit_card is not None,
                 body.bank is not None)
    return body

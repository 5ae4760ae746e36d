"""Prints a summary of one or more OFX files."""

from typing import Iterable, List, Optional, TextIO
import argparse
import logging
import sys

from .body import BankTransactionList, Transaction
from .document import Document, load_ofx_file
from .errors import OfxError

logger = logging.getLogger('ofx-statement')


def format_transaction(trn: Transaction) -> str:
    parts = [
        trn.date_posted.strftime('%Y-%m-%d'),
        trn.transaction_type.name,
        str(trn.amount),
        trn.id,
    ]
    if trn.name is not None:
        parts.append(repr(trn.name))
    if trn.memo is not None:
        parts.append(repr(trn.memo))
    if trn.currency is not None:
        parts.append('@ %s %s' % (trn.currency.rate, trn.currency.symbol))
    return '  '.join(parts)


def _write_transactions(out: TextIO,
                        tranlist: Optional[BankTransactionList]) -> None:
    if tranlist is None:
        return
    out.write('  transactions %s - %s: %d\n' %
              (tranlist.dtstart or '?', tranlist.dtend or '?',
               len(tranlist.transactions)))
    for trn in tranlist.transactions:
        out.write('    %s\n' % format_transaction(trn))


def write_summary(out: TextIO, document: Document) -> None:
    header = document.header
    body = document.body
    out.write('OFX %s (charset %s)\n' % (header.version.value, header.charset))
    if body.sign_on is not None:
        sonrs = body.sign_on.response
        fi = sonrs.financial_institution
        out.write('signon: status %d %s, server time %s, language %s%s\n' %
                  (sonrs.status.code, sonrs.status.severity,
                   sonrs.server_date.isoformat(), sonrs.language.code,
                   ', institution %s' % fi.organization if fi else ''))
    if body.credit_card is not None:
        stmt = body.credit_card.transaction_response.statement
        out.write('credit card %s (%s): ledger balance %s\n' %
                  (stmt.account.id, stmt.currency, stmt.ledger_balance.amount))
        _write_transactions(out, stmt.bank_transactions)
    if body.bank is not None:
        stmt = body.bank.transaction_response.statement
        account = stmt.account
        out.write('bank %s (%s)%s\n' %
                  (account.id if account else '?', stmt.currency,
                   ': ledger balance %s' % stmt.ledger_balance.amount
                   if stmt.ledger_balance else ''))
        _write_transactions(out, stmt.bank_transactions)


def summarize(filenames: Iterable[str], out: TextIO, err: TextIO,
              encoding: Optional[str] = None) -> int:
    """Writes a summary of each file; returns the number of failures."""
    failures = 0
    for filename in filenames:
        logger.info('Parsing %s', filename)
        try:
            document = load_ofx_file(filename, encoding=encoding)
        except OfxError as e:
            failures += 1
            err.write('%s: %s error: %s\n' % (filename, e.kind, e))
            continue
        out.write('== %s\n' % filename)
        write_summary(out, document)
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    argparser = argparse.ArgumentParser(description=__doc__)
    argparser.add_argument('ofx_filenames', nargs='+', metavar='FILE',
                           help='OFX 1.x file to parse')
    argparser.add_argument('--encoding', type=str,
                           help='Decode input files with this codec instead '
                           'of the one declared in the OFX header.')
    argparser.add_argument('--log-output', type=str,
                           help='Filename to which log output will be '
                           'written (default: stderr).')
    argparser.add_argument(
        '-d', '--debug',
        help='Set log verbosity to DEBUG.',
        action='store_const', dest='loglevel', const=logging.DEBUG,
        default=logging.WARNING)
    argparser.add_argument(
        '-v', '--verbose',
        help='Set log verbosity to INFO.',
        action='store_const', dest='loglevel', const=logging.INFO)
    args = argparser.parse_args(argv)

    logging.basicConfig(filename=args.log_output, level=args.loglevel)

    failures = summarize(args.ofx_filenames, sys.stdout, sys.stderr,
                         encoding=args.encoding)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())

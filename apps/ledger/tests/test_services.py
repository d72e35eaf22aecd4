import csv
import doctest
import io
import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from apps.ledger.services import exports
from apps.ledger.services import (
    INCOME,
    EXPENSE,
    Transaction,
    build_transactions,
    load_transactions,
    season_window,
    in_season,
    filter_transactions,
    daybook,
    cashbook,
    bankbook,
    category_vendor_ledger,
    ledger_rows,
    category_ledger_rows,
    to_csv,
    to_printable_document,
    printable_html_document,
    export_response,
    InvalidSeasonError,
    UnsupportedExportFormatError,
)


# =============================================================================
# Building transactions
# =============================================================================

def _payment(day, amount, method, type='Received', notes=''):
    return SimpleNamespace(id=day.toordinal(), date=day, amount=Decimal(amount),
                           method=method, type=type, notes=notes)


def _expense(day, amount, method, type='Paid', notes='', booking_id='',
             category='Catering', vendor='Sharma Caterers'):
    return SimpleNamespace(id=day.toordinal(), expense_date=day, amount=Decimal(amount),
                           payment_method=method, type=type, notes=notes, booking_id=booking_id,
                           category=category, vendor=vendor)


class _Payments(list):
    def all(self):
        return self


def _booking(client_name, booking_id, payments):
    return SimpleNamespace(client_name=client_name, booking_id=booking_id, payments=_Payments(payments))


class TestBuildTransactions:

    def test_payment_mapping(self):
        booking = _booking('Meera Kapoor', 'HG/2025/26/001', [
            _payment(date(2025, 9, 1), '100000', 'Bank'),
            _payment(date(2025, 9, 5), '5000', 'Bank', type='Reverted', notes='Overpaid'),
        ])

        received, reverted = build_transactions([booking], [])

        assert received.type == INCOME
        assert received.description == 'Payment from Meera Kapoor'
        assert received.booking_id == 'HG/2025/26/001'
        assert reverted.type == EXPENSE
        assert reverted.description == 'Payment Reverted to Meera Kapoor (Reason: Overpaid)'

    def test_expense_mapping(self):
        paid, reverted = build_transactions([], [
            _expense(date(2025, 10, 3), '20000', 'Cash', booking_id='HG/2025/26/001'),
            _expense(date(2025, 10, 9), '2000', 'Cash', type='Reverted', notes='Leftover'),
        ])

        assert paid.type == EXPENSE
        assert paid.description == 'Catering: Sharma Caterers'
        assert paid.category == 'Catering'
        assert paid.vendor == 'Sharma Caterers'
        assert reverted.type == INCOME
        assert reverted.description == 'Catering: Sharma Caterers (Revert Reason: Leftover)'

    def test_reverted_expense_without_notes(self):
        [reverted] = build_transactions([], [_expense(date(2025, 10, 9), '1', 'Cash', type='Reverted')])
        assert reverted.description == 'Catering: Sharma Caterers'

    def test_sorted_by_date_payments_first_on_ties(self):
        booking = _booking('Meera Kapoor', 'HG/2025/26/001', [
            _payment(date(2025, 10, 3), '100', 'Cash'),
            _payment(date(2025, 9, 1), '200', 'Cash'),
        ])
        expense = _expense(date(2025, 10, 3), '50', 'Cash')

        result = build_transactions([booking], [expense])

        assert [t.date for t in result] == [date(2025, 9, 1), date(2025, 10, 3), date(2025, 10, 3)]
        assert [t.type for t in result[1:]] == [INCOME, EXPENSE]

    def test_signed_amount(self):
        income = Transaction(date(2025, 1, 1), 'x', INCOME, Decimal('10'), 'Cash')
        expense = Transaction(date(2025, 1, 1), 'x', EXPENSE, Decimal('10'), 'Cash')

        assert income.signed_amount == Decimal('10')
        assert expense.signed_amount == Decimal('-10')


# =============================================================================
# Seasons and filters
# =============================================================================

class TestSeasonWindow:

    def test_april_to_march(self):
        assert season_window('2025-26') == (date(2025, 4, 1), date(2026, 3, 31))

    @pytest.mark.parametrize('day,expected', [
        (date(2025, 4, 1), True),
        (date(2026, 3, 31), True),
        (date(2025, 3, 31), False),
        (date(2026, 4, 1), False),
    ])
    def test_boundaries(self, day, expected):
        assert in_season(day, '2025-26') is expected

    @pytest.mark.parametrize('season', ['', 'season', None])
    def test_invalid(self, season):
        with pytest.raises(InvalidSeasonError):
            season_window(season)


class TestFilterTransactions:

    def test_no_filters_keeps_everything(self, transactions):
        assert filter_transactions(transactions) == transactions

    def test_season(self, transactions):
        result = filter_transactions(transactions, season='2025-26')
        assert [t.date for t in result] == [
            date(2025, 4, 1), date(2025, 6, 10), date(2025, 6, 12), date(2025, 7, 1), date(2026, 3, 31),
        ]

    def test_filters_are_combined(self, transactions):
        result = filter_transactions(
            transactions,
            season='2025-26',
            date_from=date(2025, 6, 1),
            date_to=date(2025, 6, 30),
            search='hg/2025/26/00',
        )
        assert [t.amount for t in result] == [Decimal('8000'), Decimal('12000')]

    def test_search_matches_description(self, transactions):
        result = filter_transactions(transactions, search='OLD BILL')
        assert [t.date for t in result] == [date(2025, 3, 31)]


# =============================================================================
# Ledgers
# =============================================================================

class TestLedgers:

    @pytest.mark.parametrize('filters', [
        {},
        {'season': '2025-26'},
        {'season': '2024-25'},
        {'date_from': date(2025, 6, 11)},
        {'search': 'HG/2025/26/001'},
        {'season': '2030-31'},
    ])
    def test_closing_balance_reconciles(self, transactions, filters):
        filtered = filter_transactions(transactions, **filters)
        entries = daybook(filtered)

        income = sum((t.amount for t in filtered if t.type == INCOME), Decimal('0'))
        expense = sum((t.amount for t in filtered if t.type == EXPENSE), Decimal('0'))
        closing = entries[-1].balance if entries else Decimal('0')
        assert closing == income - expense

    def test_running_balance(self, transactions):
        balances = [entry.balance for entry in daybook(transactions)]
        assert balances == [
            Decimal('-1000'), Decimal('49000'), Decimal('41000'), Decimal('53000'),
            Decimal('51000'), Decimal('51500'), Decimal('50800'),
        ]

    def test_cash_and_bank_partition_the_daybook(self, transactions):
        cash = [e.transaction for e in cashbook(transactions)]
        bank = [e.transaction for e in bankbook(transactions)]

        assert all(t.payment_method == 'Cash' for t in cash)
        assert all(t.payment_method != 'Cash' for t in bank)
        assert not set(cash) & set(bank)
        assert set(cash) | set(bank) == {e.transaction for e in daybook(transactions)}
        assert len(cash) + len(bank) == len(transactions)

    def test_books_restart_at_zero(self, transactions):
        cash = cashbook(transactions)
        assert [e.balance for e in cash] == [Decimal('-1000'), Decimal('-9000'), Decimal('-8500')]

    def test_category_ledger_keeps_expense_side_only(self, transactions):
        ledger = category_vendor_ledger(transactions, category='Catering')

        assert [t.amount for t in ledger['entries']] == [Decimal('8000'), Decimal('2000')]
        assert ledger['total'] == Decimal('10000')

    def test_vendor_ledger(self, transactions):
        ledger = category_vendor_ledger(transactions, vendor='Sharma Caterers')

        assert [t.amount for t in ledger['entries']] == [Decimal('8000')]
        assert ledger['total'] == Decimal('8000')

    def test_category_ledger_needs_a_key(self, transactions):
        assert category_vendor_ledger(transactions) == {'entries': [], 'total': Decimal('0.00')}


# =============================================================================
# Export
# =============================================================================

class TestExport:

    def test_ledger_rows(self, transactions):
        rows = ledger_rows(daybook(transactions[:3]))

        assert rows[0] == ['31 Mar 2025', 'Old bill', 0, Decimal('1000'), Decimal('-1000'), 'Cash', 'N/A']
        assert rows[1] == ['01 Apr 2025', 'Entry', Decimal('50000'), 0, Decimal('49000'), 'Bank', 'HG/2025/26/001']

    def test_category_rows(self, transactions):
        rows = category_ledger_rows(transactions[2:3])
        assert rows == [['10 Jun 2025', 'Entry', Decimal('8000'), 'Cash', 'HG/2025/26/001']]

    def test_csv_quotes_every_cell(self):
        content = to_csv(['Name', 'Amount'], [['Say "hi"', Decimal('10.50')], ['a,b', 0]])

        assert content == '"Name","Amount"\n"Say ""hi""","10.50"\n"a,b","0"\n'
        assert list(csv.reader(io.StringIO(content))) == [
            ['Name', 'Amount'], ['Say "hi"', '10.50'], ['a,b', '0'],
        ]

    def test_docstring_examples(self):
        results = doctest.testmod(exports)

        assert results.attempted > 0
        assert results.failed == 0

    def test_printable_document(self):
        html = to_printable_document('Daybook', ['Date', 'Description'], [['01 Apr 2025', '<b>x</b>']])

        assert '<title>Daybook</title>' in html
        assert '<th>Description</th>' in html
        assert '&lt;b&gt;x&lt;/b&gt;' in html
        assert 'window.print()' in html

    def test_printable_html_replaces_title(self):
        html = printable_html_document('<html><head><title>Old</title></head><body></body></html>', 'New & Co')
        assert html == '<html><head><title>New &amp; Co</title></head><body></body></html>'

    def test_printable_html_adds_title(self):
        html = printable_html_document('<html><head></head><body>x</body></html>', 'Proforma')
        assert html == '<html><head><title>Proforma</title></head><body>x</body></html>'

    def test_printable_html_wraps_fragment(self):
        html = printable_html_document('<p>x</p>', 'Proforma')
        assert html.startswith('<!DOCTYPE html><html><head><title>Proforma</title></head>')
        assert '<body><p>x</p></body>' in html

    def test_export_response_csv(self):
        response = export_response('csv', title='Ledger for category: Catering', headers=['A'], rows=[[1]])

        assert response['Content-Type'] == 'text/csv; charset=utf-8-sig'
        assert response['Content-Disposition'] == 'attachment; filename="Ledger_for_category:_Catering.csv"'

    def test_export_response_unknown_format(self):
        with pytest.raises(UnsupportedExportFormatError):
            export_response('xlsx', title='Daybook', headers=[], rows=[])


# =============================================================================
# Stored data
# =============================================================================

@pytest.mark.django_db
class TestLoadTransactions:

    def test_loads_payments_and_expenses(self, venue_activity):
        result = load_transactions()

        assert [(t.date, t.type, t.amount) for t in result] == [
            (date(2025, 4, 1), EXPENSE, Decimal('4500.00')),
            (date(2025, 9, 1), INCOME, Decimal('100000.00')),
            (date(2025, 10, 1), INCOME, Decimal('50000.00')),
            (date(2025, 10, 3), EXPENSE, Decimal('20000.00')),
            (date(2025, 10, 5), EXPENSE, Decimal('10000.00')),
            (date(2026, 3, 31), INCOME, Decimal('2000.00')),
            (date(2026, 4, 1), EXPENSE, Decimal('700.00')),
        ]
        assert result[4].description == 'Payment Reverted to Meera Kapoor (Reason: Date moved)'
        assert result[5].description == 'Catering: Sharma Caterers (Revert Reason: Leftover)'
        assert len({t.source for t in result}) == len(result)

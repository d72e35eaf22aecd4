"""
Expenses App - Venue Expenses, Categories and Vendors

Expenses are either tied to a booking (by its human-facing booking id) or
general overheads. Like payments they are append-only: a correction is a
new ``Reverted`` expense.

Key Features:
- Expense entry with manpower (count x rate) categories
- Vendor auto-creation on first use of a new vendor name
- Expense reversal
- Roll-up of booking expense totals
- Category and vendor management (deleting a category removes its vendors)
"""

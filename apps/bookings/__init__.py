"""
Bookings App - Venue Bookings and Payments

This app manages event bookings for the venue and the payments received
against them. Payments are an append-only ledger: a correction is a new
``Reverted`` payment linked to the original, never an edit or a delete.

Key Features:
- Booking lifecycle (Upcoming -> Completed | Cancelled)
- Season-scoped booking ids (HG/2025/26/001)
- Price tier fixed at creation from the contracted rate
- Payment recording and reversal
- Booking financial summary (paid, balance due, profit)
- Cancellation with refund expense
- Bookings report and printable proforma

Architecture:
- Models: Booking, Payment
- Services: booking_management, payment_management, financials
- Views: RESTful API with ViewSets
"""

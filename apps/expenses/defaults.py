"""Default expense categories installed by ``seed_venue_defaults``."""

OTHER_CATEGORY_ID = 'other'

REFUND_CATEGORY_NAME = 'Refund'

DEFAULT_EXPENSE_CATEGORIES = [
    {'id': 'catering', 'name': 'Catering', 'requires_manpower': False},
    {'id': 'decoration', 'name': 'Decoration', 'requires_manpower': False},
    {'id': 'staff', 'name': 'Staff', 'requires_manpower': True},
    {'id': 'labour', 'name': 'Labour', 'requires_manpower': True},
    {'id': 'av-equipment', 'name': 'AV Equipment', 'requires_manpower': False},
    {'id': 'salary', 'name': 'Salary', 'requires_manpower': False},
    {'id': 'utilities', 'name': 'Utilities', 'requires_manpower': False},
    {'id': 'maintenance', 'name': 'Maintenance', 'requires_manpower': False},
    {'id': 'marketing', 'name': 'Marketing', 'requires_manpower': False},
    {'id': 'refund', 'name': REFUND_CATEGORY_NAME, 'requires_manpower': False},
    {'id': OTHER_CATEGORY_ID, 'name': 'Other', 'requires_manpower': False},
]

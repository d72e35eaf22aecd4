"""Default venue configuration installed by ``seed_venue_defaults``."""

from decimal import Decimal


DEFAULT_SERVICES_CONFIG = {
    'infrastructure': [
        {'id': 'ac-hall', 'name': 'AC Hall', 'type': 'checkbox'},
        {'id': 'indoor-stage', 'name': 'Indoor Stage', 'type': 'checkbox'},
        {'id': 'coffee-machine', 'name': 'Coffee Machine', 'type': 'checkbox'},
        {
            'id': 'generator-setup',
            'name': 'Generator Setup',
            'type': 'dropdown',
            'options': ['None', '15 KVA Generator', '25 KVA Generator'],
        },
    ],
    'decoration': [
        {'id': 'flower-decoration', 'name': 'Flower Decoration', 'type': 'checkbox'},
        {'id': 'lighting-decoration', 'name': 'Lighting Decoration', 'type': 'checkbox'},
        {'id': 'natural-flower-decoration', 'name': 'Natural Flower Decoration', 'type': 'checkbox'},
    ],
    'labour': [
        {'id': 'service-manager-count', 'name': 'Service Manager', 'type': 'number', 'min': 0, 'max': 5},
        {'id': 'waiters-count', 'name': 'Waiters', 'type': 'number', 'min': 0, 'max': 20},
    ],
    'halwai': [
        {'id': 'fruit-counter-count', 'name': 'Fruit Counter', 'type': 'number', 'min': 0, 'max': 10},
        {'id': 'main-course-counter-count', 'name': 'Main Course Counter', 'type': 'number', 'min': 0, 'max': 10},
        {'id': 'snacks-counter-count', 'name': 'Snacks Counter', 'type': 'number', 'min': 0, 'max': 10},
    ],
    'extra': [
        {
            'id': 'dj-setup',
            'name': 'DJ Setup',
            'type': 'dropdown',
            'options': ['None', 'Basic DJ Setup', 'Premium DJ Setup'],
        },
        {'id': 'anar-matka', 'name': 'Anar Matka', 'type': 'checkbox'},
    ],
    'entry-decor': [
        {'id': 'mirror-entry', 'name': 'Mirror Entry', 'type': 'checkbox'},
        {'id': 'balloon-arch', 'name': 'Balloon Arch', 'type': 'checkbox'},
        {'id': 'welcome-gate', 'name': 'Welcome Gate', 'type': 'checkbox'},
    ],
}

DEFAULT_PACKAGES = [
    {
        'name': 'Silver Package',
        'price': Decimal('110000'),
        'services': {
            'ac-hall': True,
            'flower-decoration': True,
            'waiters-count': 5,
            'generator-setup': '15 KVA Generator',
            'main-course-counter-count': 2,
        },
    },
    {
        'name': 'Gold Package',
        'price': Decimal('145000'),
        'services': {
            'ac-hall': True,
            'flower-decoration': True,
            'lighting-decoration': True,
            'waiters-count': 8,
            'service-manager-count': 1,
            'generator-setup': '25 KVA Generator',
            'main-course-counter-count': 3,
            'dj-setup': 'Basic DJ Setup',
        },
    },
    {
        'name': 'Diamond Package',
        'price': Decimal('180000'),
        'services': {
            'ac-hall': True,
            'natural-flower-decoration': True,
            'lighting-decoration': True,
            'waiters-count': 12,
            'service-manager-count': 2,
            'generator-setup': '25 KVA Generator',
            'main-course-counter-count': 4,
            'dj-setup': 'Premium DJ Setup',
            'mirror-entry': True,
        },
    },
]

"""
Demo Makers Data for AssignmentPro
Every demo maker is approved and payment-verified so they can sign in right away
"""

# "department" refers to a DEMO_DEPARTMENTS name
DEMO_MAKERS = [
    {
        "name": "Abebe Kebede",
        "email": "abebe.cs@assignmentpro.com",
        "phone": "+251-911-000001",
        "telegram_username": "abebe_cs",
        "whatsapp_number": None,
        "password": "password123",
        "department": "Computer Science",
    },
    {
        "name": "Hanna Tesfaye",
        "email": "hanna.cs@assignmentpro.com",
        "phone": "+251-911-000002",
        "telegram_username": None,
        "whatsapp_number": "+251911000002",
        "password": "password123",
        "department": "Computer Science",
    },
    {
        "name": "Dawit Alemu",
        "email": "dawit.math@assignmentpro.com",
        "phone": "+251-911-000003",
        "telegram_username": "dawit_math",
        "whatsapp_number": "+251911000003",
        "password": "password123",
        "department": "Mathematics",
    },
    {
        "name": "Selam Girma",
        "email": "selam.physics@assignmentpro.com",
        "phone": "+251-911-000004",
        "telegram_username": "selam_phys",
        "whatsapp_number": None,
        "password": "password123",
        "department": "Physics",
    },
    {
        "name": "Yonas Bekele",
        "email": "yonas.chem@assignmentpro.com",
        "phone": "+251-911-000005",
        "telegram_username": None,
        "whatsapp_number": "+251911000005",
        "password": "password123",
        "department": "Chemistry",
    },
    {
        "name": "Meron Haile",
        "email": "meron.bio@assignmentpro.com",
        "phone": "+251-911-000006",
        "telegram_username": "meron_bio",
        "whatsapp_number": None,
        "password": "password123",
        "department": "Biology",
    },
]

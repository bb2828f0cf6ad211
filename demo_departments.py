"""
Demo Departments Data for AssignmentPro
Service fees are in Birr; makers earn the commission share of the fee
"""

DEMO_DEPARTMENTS = [
    {
        "name": "Computer Science",
        "description": "Programming, algorithms, databases and networking assignments",
        "service_fee": 500,
    },
    {
        "name": "Mathematics",
        "description": "Calculus, linear algebra, statistics and discrete math",
        "service_fee": 400,
    },
    {
        "name": "Physics",
        "description": "Mechanics, electromagnetism and lab reports",
        "service_fee": 450,
    },
    {
        "name": "Chemistry",
        "description": "General, organic and analytical chemistry",
        "service_fee": 400,
    },
    {
        "name": "Biology",
        "description": "Cell biology, genetics and ecology",
        "service_fee": 350,
    },
]

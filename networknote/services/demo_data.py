"""
Fixed, clearly fictional dataset used when the database is unreachable.
"""

from networknote.models.domain.directory_domain import AdminUser, HRContact

MOCK_COMPANIES = [
    "Google",
    "Meta",
    "Amazon",
    "Apple",
    "Microsoft",
    "Netflix",
    "Tesla",
    "Adobe",
    "Salesforce",
    "Oracle",
    "IBM",
    "Intel",
    "Nvidia",
    "PayPal",
    "Uber",
    "Airbnb",
    "Spotify",
    "Twitter",
]

MOCK_HR_DATA = [
    HRContact(id="1", name="Sarah Johnson", email="sarah.j@company.com", position="HR Manager"),
    HRContact(id="2", name="Michael Chen", email="m.chen@company.com", position="Talent Acquisition Lead"),
    HRContact(id="3", name="Emma Williams", email="e.williams@company.com", position="Senior Recruiter"),
    HRContact(id="4", name="David Brown", email="d.brown@company.com", position="HR Business Partner"),
    HRContact(id="5", name="Lisa Anderson", email="l.anderson@company.com", position="Recruitment Specialist"),
]

MOCK_MANAGERS = [
    "Sarah Johnson",
    "Michael Chen",
    "Robert Wilson",
    "Jennifer Lee",
]

DEMO_USERS = [
    AdminUser(
        id="demo-1",
        name="Alex Demo",
        email="alex.demo@example.com",
        manager="Sarah Johnson",
        status="paid",
        created_at="2024-01-15",
    ),
    AdminUser(
        id="demo-2",
        name="Jordan Sample",
        email="jordan.sample@example.com",
        manager="Michael Chen",
        created_at="2024-02-03",
    ),
    AdminUser(
        id="demo-3",
        name="Taylor Placeholder",
        email="taylor.placeholder@example.com",
        created_at="2024-02-20",
    ),
]


def demo_companies(letter: str) -> list[str]:
    return [company for company in MOCK_COMPANIES if company.upper().startswith(letter.upper())]


def demo_users() -> list[AdminUser]:
    return [user.model_copy() for user in DEMO_USERS]

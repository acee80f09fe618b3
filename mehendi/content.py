from datetime import datetime, timezone

from mehendi.state.entities import ContactSubmission

SERVICES = [
    {
        "title": "Bridal Mehendi",
        "description": (
            "Exquisite full bridal mehendi designs covering hands and feet with intricate "
            "patterns, portraits, and traditional motifs for your special day."
        ),
        "features": ["Full hands & feet", "Custom portraits", "Premium quality"],
    },
    {
        "title": "Engagement Mehendi",
        "description": (
            "Beautiful designs perfect for engagement ceremonies, featuring elegant patterns "
            "that complement your outfit and jewelry."
        ),
        "features": ["Medium coverage", "Modern designs", "Quick application"],
    },
    {
        "title": "Arabic Mehendi",
        "description": (
            "Bold and beautiful Arabic style designs with flowing patterns, florals, and "
            "geometric shapes for a contemporary look."
        ),
        "features": ["Bold strokes", "Floral patterns", "Fast drying"],
    },
    {
        "title": "Festival Mehendi",
        "description": (
            "Celebrate Karva Chauth, Diwali, Eid, and other festivals with stunning "
            "traditional mehendi designs."
        ),
        "features": ["Traditional motifs", "Festive themes", "All age groups"],
    },
    {
        "title": "Indo-Western Fusion",
        "description": (
            "A perfect blend of traditional Indian and modern Western elements creating "
            "unique and trendy designs."
        ),
        "features": ["Unique patterns", "Contemporary style", "Minimalist options"],
    },
    {
        "title": "Custom Designs",
        "description": (
            "Get personalized mehendi designs tailored to your preferences, including names, "
            "dates, and custom motifs."
        ),
        "features": ["Personalized art", "Custom themes", "Creative freedom"],
    },
]


def demo_contacts():
    """Inquiries shown on a fresh install."""
    return [
        ContactSubmission(
            id="1",
            name="Priya Sharma",
            email="priya@example.com",
            phone="+91 98765 43210",
            message="I would like to book mehendi for my wedding on 15th March. Please share your packages.",
            created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        ),
        ContactSubmission(
            id="2",
            name="Anjali Patel",
            email="anjali.patel@email.com",
            phone="+91 87654 32109",
            message="Looking for bridal mehendi services. Can you provide home service?",
            created_at=datetime(2024, 1, 14, tzinfo=timezone.utc),
        ),
        ContactSubmission(
            id="3",
            name="Meera Gupta",
            email="meera.g@email.com",
            phone="+91 76543 21098",
            message="Need arabic mehendi design for engagement ceremony. Budget around 5000 INR.",
            created_at=datetime(2024, 1, 13, tzinfo=timezone.utc),
        ),
    ]

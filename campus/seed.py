"""Idempotent table bootstrap, admin account and sample catalog data."""
import logging

from sqlalchemy.orm import Session

from . import repository
from .auth import get_password_hash
from .config import Settings
from .database import Base, engine
from .models import CafeteriaInfo, RoleEnum, User

logger = logging.getLogger(__name__)

SAMPLE_CLASSROOMS = [
    {"room": "G-101", "dept": "CSE", "floor": "Ground Floor", "capacity": 60},
    {"room": "G-102", "dept": "EEE", "floor": "Ground Floor", "capacity": 50},
    {"room": "G-103", "dept": "BBA", "floor": "Ground Floor", "capacity": 70},
    {"room": "1-201", "dept": "CSE", "floor": "1st Floor", "capacity": 80},
    {"room": "1-202", "dept": "CSE", "floor": "1st Floor", "capacity": 60},
    {"room": "1-203", "dept": "EEE", "floor": "1st Floor", "capacity": 55},
    {"room": "2-301", "dept": "BBA", "floor": "2nd Floor", "capacity": 90},
    {"room": "2-302", "dept": "Civil", "floor": "2nd Floor", "capacity": 65},
    {"room": "2-303", "dept": "Civil", "floor": "2nd Floor", "capacity": 70},
    {"room": "3-401", "dept": "CSE", "floor": "3rd Floor", "capacity": 75},
    {"room": "3-402", "dept": "EEE", "floor": "3rd Floor", "capacity": 60},
    {"room": "3-403", "dept": "BBA", "floor": "3rd Floor", "capacity": 85},
]

SAMPLE_LABS = [
    {"name": "CSE Programming Lab 1", "dept": "CSE", "location": "1st Floor, Room 1-105", "computers": 50,
     "projector": "Yes", "instruments": "Whiteboard, Sound System", "status": "open", "hours": "8:00 AM - 6:00 PM"},
    {"name": "CSE Programming Lab 2", "dept": "CSE", "location": "1st Floor, Room 1-106", "computers": 45,
     "projector": "Yes", "instruments": "Whiteboard", "status": "open", "hours": "8:00 AM - 8:00 PM"},
    {"name": "EEE Circuit Lab", "dept": "EEE", "location": "2nd Floor, Room 2-205", "computers": 30,
     "projector": "No", "instruments": "Oscilloscopes (20), Multimeters (25), Function Generators (15)",
     "status": "closed", "hours": "Maintenance until 3:00 PM"},
    {"name": "Physics Lab", "dept": "Physics", "location": "Ground Floor, Room G-015", "computers": 25,
     "projector": "Yes", "instruments": "Microscopes (15), Lab Equipment Sets (20)", "status": "open",
     "hours": "9:00 AM - 5:00 PM"},
    {"name": "Chemistry Lab", "dept": "Chemistry", "location": "Ground Floor, Room G-016", "computers": 30,
     "projector": "Yes", "instruments": "Fume Hoods (4), Lab Benches (10), Glassware Sets (30)", "status": "open",
     "hours": "9:00 AM - 5:00 PM"},
    {"name": "Network & Security Lab", "dept": "CSE", "location": "3rd Floor, Room 3-308", "computers": 40,
     "projector": "Yes", "instruments": "Routers (10), Switches (15), Network Cables", "status": "closed",
     "hours": "Scheduled class until 4:30 PM"},
    {"name": "CAD Lab", "dept": "Civil", "location": "2nd Floor, Room 2-210", "computers": 35,
     "projector": "Yes", "instruments": "Drawing Tablets (35), 3D Printer", "status": "open",
     "hours": "8:00 AM - 6:00 PM"},
]

SAMPLE_BUSES = [
    {"number": "A1", "time": "7:30 AM", "route": "Campus → City Center → Main Station",
     "stops": ["Campus Gate", "Medical College", "Shopping Mall", "City Center", "Main Station"]},
    {"number": "A2", "time": "8:00 AM", "route": "Campus → University Area → Airport Road",
     "stops": ["Campus Gate", "Student Dormitory", "University Market", "Tech Park", "Airport Road"]},
    {"number": "B1", "time": "9:00 AM", "route": "Campus → Residential Area → Lake View",
     "stops": ["Campus Gate", "Faculty Housing", "Green Park", "Lake View"]},
    {"number": "B2", "time": "1:00 PM", "route": "Main Station → City Center → Campus",
     "stops": ["Main Station", "City Center", "Shopping Mall", "Medical College", "Campus Gate"]},
    {"number": "C1", "time": "5:00 PM", "route": "Campus → Downtown → Metro Station",
     "stops": ["Campus Gate", "Library Square", "Downtown Plaza", "Business District", "Metro Station"]},
    {"number": "C2", "time": "6:30 PM", "route": "Airport Road → University Area → Campus",
     "stops": ["Airport Road", "Tech Park", "University Market", "Student Dormitory", "Campus Gate"]},
]

SAMPLE_MENU = [
    {"name": "Chicken Biriyani", "description": "Traditional aromatic rice with tender chicken", "price": 180.00,
     "category": "food", "availability": "available"},
    {"name": "Beef Curry", "description": "Spicy beef curry with rice", "price": 160.00,
     "category": "food", "availability": "available"},
    {"name": "Fish Fry", "description": "Crispy fried fish with lemon", "price": 140.00,
     "category": "food", "availability": "limited"},
    {"name": "Vegetable Fried Rice", "description": "Mixed vegetables with fragrant rice", "price": 120.00,
     "category": "food", "availability": "available"},
    {"name": "Dal with Rice", "description": "Traditional lentil curry with steamed rice", "price": 80.00,
     "category": "food", "availability": "available"},
    {"name": "Chicken Sandwich", "description": "Grilled chicken with fresh vegetables", "price": 100.00,
     "category": "snacks", "availability": "available"},
    {"name": "Samosa", "description": "Crispy pastry with spiced filling", "price": 25.00,
     "category": "snacks", "availability": "available"},
    {"name": "French Fries", "description": "Golden crispy potato fries", "price": 60.00,
     "category": "snacks", "availability": "available"},
    {"name": "Spring Rolls", "description": "Crispy vegetable spring rolls", "price": 45.00,
     "category": "snacks", "availability": "limited"},
    {"name": "Tea", "description": "Hot milk tea", "price": 15.00, "category": "drinks", "availability": "available"},
    {"name": "Coffee", "description": "Fresh brewed coffee", "price": 25.00,
     "category": "drinks", "availability": "available"},
    {"name": "Fresh Juice", "description": "Seasonal fresh fruit juice", "price": 40.00,
     "category": "drinks", "availability": "available"},
    {"name": "Soft Drinks", "description": "Chilled carbonated drinks", "price": 30.00,
     "category": "drinks", "availability": "available"},
    {"name": "Lassi", "description": "Sweet yogurt drink", "price": 35.00, "category": "drinks", "availability": "limited"},
]

SAMPLE_CAFETERIA_INFO = {
    "location": "Ground Floor, Main Building",
    "contact": "+880-1234-567890",
    "hours": "8:00 AM - 8:00 PM",
}


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)


def ensure_admin(db: Session, settings: Settings) -> User:
    admin = db.query(User).filter(User.student_id == settings.admin_student_id).first()
    if admin:
        return admin
    admin = User(
        student_id=settings.admin_student_id,
        name=settings.admin_name,
        hashed_password=get_password_hash(settings.admin_password),
        role=RoleEnum.ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created default admin account '%s'", admin.student_id)
    return admin


def seed_sample_data(db: Session) -> bool:
    """Insert the sample catalogs unless classrooms already exist."""

    if repository.classrooms.count(db) > 0:
        logger.info("Sample data already present, skipping seed")
        return False

    for classroom in SAMPLE_CLASSROOMS:
        repository.classrooms.create(db, classroom)
    for lab in SAMPLE_LABS:
        repository.labs.create(db, lab)
    for bus in SAMPLE_BUSES:
        repository.buses.create(db, bus)
    for item in SAMPLE_MENU:
        repository.menu_items.create(db, item)
    db.add(CafeteriaInfo(**SAMPLE_CAFETERIA_INFO))
    db.commit()
    logger.info("Inserted sample catalog data")
    return True


def bootstrap(db: Session, settings: Settings) -> None:
    create_tables()
    ensure_admin(db, settings)
    if settings.seed_sample_data:
        seed_sample_data(db)

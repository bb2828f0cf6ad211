# create_tables.py
from assignmentpro.config import settings
from assignmentpro.database import Base, SessionLocal, engine
from assignmentpro.models import Admin
from assignmentpro.utils.security import get_password_hash

def create_tables():
    """Create all tables"""
    Base.metadata.create_all(bind=engine)
    print("✅ All tables created successfully!")

def create_default_admin():
    """Create the bootstrap admin if it doesn't exist yet"""
    db = SessionLocal()
    try:
        existing = db.query(Admin).filter(Admin.email == settings.DEFAULT_ADMIN_EMAIL).first()
        if existing:
            print(f"ℹ️ Admin {settings.DEFAULT_ADMIN_EMAIL} already exists")
            return existing

        admin = Admin(
            email=settings.DEFAULT_ADMIN_EMAIL,
            hashed_password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
            name=settings.DEFAULT_ADMIN_NAME,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        print("✅ Default admin user created!")
        print(f"   Email: {settings.DEFAULT_ADMIN_EMAIL}")
        print(f"   Password: {settings.DEFAULT_ADMIN_PASSWORD}")
        return admin
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_tables()
    create_default_admin()

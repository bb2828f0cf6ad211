"""
Master Database Seeding Script
Creates database tables and populates with demo data
"""

import sys
from datetime import datetime

from assignmentpro.database import SessionLocal
from assignmentpro.models import Department, User
from assignmentpro.services import ledger
from assignmentpro.utils.security import get_password_hash
from create_tables import create_tables, create_default_admin

# Import demo data
from demo_departments import DEMO_DEPARTMENTS
from demo_makers import DEMO_MAKERS

def run_create_tables():
    """Create the schema and the bootstrap admin"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Database Tables")
    print(f"{'='*60}")

    try:
        create_tables()
        create_default_admin()
        return True
    except Exception as e:
        print(f"[ERROR] Error creating database tables: {e}")
        return False

def seed_demo_departments():
    """Create demo departments in the database"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Departments")
    print(f"{'='*60}")

    session = SessionLocal()
    try:
        created = 0
        for department_data in DEMO_DEPARTMENTS:
            existing = session.query(Department).filter(Department.name == department_data["name"]).first()
            if existing:
                print(f"[SKIP] Department {department_data['name']} already exists, skipping...")
                continue

            session.add(Department(**department_data))
            created += 1
            print(f"[SUCCESS] Created department: {department_data['name']} (Fee: {department_data['service_fee']})")

        session.commit()
        print(f"\n[SUCCESS] Successfully created {created} demo departments!")
        return True

    except Exception as e:
        print(f"[ERROR] Error creating demo departments: {e}")
        session.rollback()
        return False
    finally:
        session.close()

def seed_demo_makers():
    """Create approved, paid demo makers with their registration fee on the ledger"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Makers")
    print(f"{'='*60}")

    session = SessionLocal()
    try:
        departments = {d.name: d.id for d in session.query(Department).all()}
        created = 0

        for maker_data in DEMO_MAKERS:
            if session.query(User).filter(User.email == maker_data["email"]).first():
                print(f"[SKIP] Maker {maker_data['email']} already exists, skipping...")
                continue

            department_id = departments.get(maker_data["department"])
            if department_id is None:
                print(f"[ERROR] Department {maker_data['department']} not found, skipping {maker_data['email']}")
                continue

            maker = User(
                name=maker_data["name"],
                email=maker_data["email"],
                phone=maker_data["phone"],
                telegram_username=maker_data["telegram_username"],
                whatsapp_number=maker_data["whatsapp_number"],
                hashed_password=get_password_hash(maker_data["password"]),
                department_id=department_id,
                is_approved=True,
                payment_approved=True,
                registration_fee=True,
                payment_method="Bank Transfer",
            )
            session.add(maker)
            session.flush()
            ledger.settle_registration_fee(session, maker, approved=True)
            created += 1
            print(f"[SUCCESS] Created maker: {maker_data['name']} ({maker_data['department']})")

        session.commit()
        print(f"\n[SUCCESS] Successfully created {created} demo makers!")
        return True

    except Exception as e:
        print(f"[ERROR] Error creating demo makers: {e}")
        session.rollback()
        return False
    finally:
        session.close()

def main():
    """Main function to run all seeding operations"""
    print("🌱 MASTER DATABASE SEEDING SCRIPT")
    print("=" * 60)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    seeding_operations = [
        ("run_create_tables", run_create_tables),
        ("seed_demo_departments", seed_demo_departments),
        ("seed_demo_makers", seed_demo_makers),
    ]

    success_count = 0
    failed_operations = []

    for name, operation in seeding_operations:
        if operation():
            success_count += 1
        else:
            failed_operations.append(name)

    # Summary
    print(f"\n{'='*60}")
    print("📊 SEEDING SUMMARY")
    print(f"{'='*60}")
    print(f"Total Operations: {len(seeding_operations)}")
    print(f"Successful: {success_count}")
    print(f"Failed: {len(failed_operations)}")

    if failed_operations:
        print(f"Failed Operations: {', '.join(failed_operations)}")
        print(f"\n[WARNING] Some seeding operations failed. Please check the errors above.")
        sys.exit(1)

    print(f"\n[SUCCESS] ALL SEEDING OPERATIONS COMPLETED SUCCESSFULLY!")
    print(f"\n[INFO] What was created:")
    print(f"   - Database tables and schema")
    print(f"   - {len(DEMO_DEPARTMENTS)} Departments")
    print(f"   - {len(DEMO_MAKERS)} approved Makers")
    print(f"\n[INFO] Login Credentials:")
    print(f"   - Admin: see DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD")
    print(f"   - All makers: password123")

    print(f"\nCompleted at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

if __name__ == "__main__":
    main()

# scripts/create_admin.py
"""
Create (or reset) the admin account for the CMS.
Run this script once after configuring .env, or whenever the admin password is lost.
"""
import sys
from pathlib import Path

# Ensure UTF-8 capable stdout/stderr on Windows terminals
try:
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
except Exception:
    pass

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from streamhub.db.session import get_db_session, test_db_connection, init_db
from streamhub.core.config import ADMIN_USERNAME, ADMIN_PASSWORD, DATABASE_URL
from streamhub.services import get_auth_service


def main() -> int:
    print("=" * 60)
    print("Creating Admin User")
    print("=" * 60)

    print(f"\n1) Testing database connection ({DATABASE_URL})...")
    if not test_db_connection():
        print("[ERROR] Database connection failed!")
        print("   Please check DATABASE_URL / DATABASE_PATH in .env")
        return 1
    print("[OK] Database connected")

    print("\n2) Initializing database tables...")
    try:
        init_db()
        print("[OK] Tables initialized")
    except Exception as e:
        print(f"[ERROR] Failed to initialize tables: {e}")
        return 1

    print(f"\n3) Creating admin user '{ADMIN_USERNAME}'...")
    try:
        with get_db_session() as db:
            user = get_auth_service().ensure_admin_user(
                db, ADMIN_USERNAME, ADMIN_PASSWORD, reset_password=True
            )
            print(f"[OK] Admin user '{user.username}' ready (id={user.id})")
    except Exception as e:
        print(f"[ERROR] Error: {e}")
        return 1

    print("\n" + "=" * 60)
    print("ADMIN USER READY!")
    print("=" * 60)
    print(f"\n   Username: {ADMIN_USERNAME}")
    print("   Password: (ADMIN_PASSWORD from .env)")
    print("\nStart the application with:")
    print("   python -m streamhub.main")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
python -m scripts.seed

Seeds demo tenants, users and checklist data. Safe to run twice: existing
tenants and users are left untouched.
"""

import sys

sys.path.insert(0, ".")

from dotenv import load_dotenv
load_dotenv()

from deviflow.database import SessionLocal
from deviflow import models  # noqa: F401
from deviflow.core.tenant_context import TenantScope
from deviflow.crud import tenant as tenant_crud, user as user_crud, checklist as checklist_crud, category as category_crud
from deviflow.crud import work_order as work_order_crud
from deviflow.models.tenant import Module
from deviflow.models.user import Role
from deviflow.schemas.tenant import TenantCreate

TENANTS = [
    ("Demo Corporation", "demo", [Module.checklists]),
    ("Volvo Manufacturing", "volvo", [Module.checklists, Module.maintenance]),
    ("IKEA Production", "ikea", [Module.checklists]),
]

USERS = [
    # (subdomain, email, password, role, first_name, last_name)
    ("demo", "admin@demo.se", "admin123", Role.admin, "Demo", "Admin"),
    ("demo", "user@demo.se", "user123", Role.user, "Demo", "User"),
    ("volvo", "admin@volvo.se", "volvo123", Role.admin, "Volvo", "Admin"),
    ("ikea", "admin@ikea.se", "ikea123", Role.admin, "IKEA", "Admin"),
]

CHECKLISTS = {
    "demo": ("Kvalitetskontroll", "Daglig kvalitetskontroll för produktionslinje", ["Säkerhet", "Kvalitet"]),
    "volvo": ("Monteringskontroll", "Kontroll efter montering", ["Moment", "Dokumentation"]),
}


def seed():
    """Create demo tenants, their users and a checklist per tenant."""
    db = SessionLocal()

    try:
        tenants = {}
        for name, subdomain, modules in TENANTS:
            existing = tenant_crud.get_by_subdomain(db, subdomain)
            if existing:
                print(f"Tenant exists: {subdomain}")
                tenants[subdomain] = existing
                continue
            tenants[subdomain] = tenant_crud.create(
                db, obj_in=TenantCreate(name=name, subdomain=subdomain, modules=modules)
            )
            print(f"Added tenant: {subdomain}")

        admins = {}
        for subdomain, email, password, role, first_name, last_name in USERS:
            tenant = tenants[subdomain]
            user = user_crud.get_by_email(db, tenant, email)
            if user is None:
                user = user_crud.create_in_tenant(
                    db,
                    tenant,
                    email=email,
                    password=password,
                    role=role,
                    first_name=first_name,
                    last_name=last_name,
                )
                print(f"Added user: {email} ({subdomain})")
            if role == Role.admin:
                admins[subdomain] = user

        for subdomain, (name, description, categories) in CHECKLISTS.items():
            admin = admins[subdomain]
            scope = TenantScope(user_id=admin.id, tenant_id=admin.tenant_id, role=admin.role, email=admin.email)
            if checklist_crud.get_multi(db, scope, limit=1):
                continue
            checklist = checklist_crud.create(db, scope, obj_in={
                "name": name,
                "description": description,
                "order": 1,
                "created_by": admin.id,
            })
            for order, category_name in enumerate(categories, start=1):
                category_crud.create(db, scope, obj_in={
                    "checklist_id": checklist.id,
                    "name": category_name,
                    "order": order,
                })
            print(f"Added checklist: {name} ({subdomain})")

        volvo_admin = admins["volvo"]
        volvo_scope = TenantScope(
            user_id=volvo_admin.id, tenant_id=volvo_admin.tenant_id, role=volvo_admin.role, email=volvo_admin.email
        )
        if not work_order_crud.get_multi(db, volvo_scope, limit=1):
            work_order_crud.create(db, volvo_scope, obj_in={
                "title": "Byt hydraulslang på press 3",
                "description": "Läckage upptäckt vid skiftbyte",
                "created_by": volvo_admin.id,
            })
            print("Added work order (volvo)")

        print("\nSeed complete")

    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    seed()

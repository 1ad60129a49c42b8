"""
Seed Roles Script - Creates the default custom roles
Run: python -m scripts.seed_roles [--force]

Roles that already exist are left alone unless --force is given, in which
case their permission maps are replaced.
"""
import argparse
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hrdesk.domain.models import RoleCreateRequest
from hrdesk.repositories.mongo_client import Collections, get_collection, create_indexes
from hrdesk.utils.time import utc_now


DEFAULT_ROLES = [
    {
        "name": "hr_officer",
        "permissions": {
            "Attendance": {
                "Attendance Tracker": "full",
                "Today's Presents": "view",
                "Today's Absents": "view",
                "Monthly Absents": "view",
            },
            "Leave": {
                "Leave Management": "full",
                "Leave Tracker": "view",
                "Upcoming Leaves": "view",
            },
            "Staff Management": {"Staff Profiles": "full", "Create Staff": "full"},
            "Training": {"Training Requests": "full", "Approved Trainings": "view", "Rejected Trainings": "view"},
            "Evaluation": {"Performance Evaluation": "full"},
            "Tasks": {"View Tasks": "view"},
        },
    },
    {
        "name": "payroll_officer",
        "permissions": {
            "Payroll": {"Payroll Management": "full", "Salary Management": "full"},
            "Expenses": {"Pending Claims": "full"},
            "Training": {"Training Costs": "view"},
        },
    },
    {
        "name": "line_manager",
        "permissions": {
            "Attendance": {"Today's Presents": "view", "Today's Absents": "view"},
            "Leave": {"Leave Tracker": "view", "Upcoming Leaves": "view"},
            "Tasks": {"View Tasks": "view"},
            "Bulletin Board": {"Bulletin Board": "full"},
        },
    },
    {
        "name": "store_keeper",
        "permissions": {
            "Inventory": {
                "Inventory Management": "full",
                "Create Items": "full",
                "View Requests": "full",
                "Inventory Summary": "view",
            },
        },
    },
]


def seed_roles(force: bool = False) -> None:
    """Insert the default roles, validating each permission map first"""
    roles_col = get_collection(Collections.ROLES)
    create_indexes()

    now = utc_now()
    for entry in DEFAULT_ROLES:
        role = RoleCreateRequest.model_validate(entry)
        existing = roles_col.find_one({"name": role.name})

        if existing and not force:
            print(f"  - {role.name}: exists, skipped")
            continue

        if existing:
            roles_col.update_one(
                {"_id": existing["_id"]},
                {"$set": {"permissions": role.permissions, "updatedAt": now}},
            )
            print(f"  ~ {role.name}: permissions replaced")
        else:
            roles_col.insert_one({
                "name": role.name,
                "permissions": role.permissions,
                "createdAt": now,
                "updatedAt": now,
            })
            print(f"  + {role.name}: created")


def main():
    parser = argparse.ArgumentParser(description="Seed default custom roles")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace permission maps of roles that already exist"
    )
    args = parser.parse_args()

    print("Seeding roles...")
    seed_roles(force=args.force)
    print("Done.")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from booking_app.core.config import IS_DEV  # noqa: E402
from booking_app.core.database import SessionLocal, engine  # noqa: E402
from booking_app.services.admin_bootstrap import (  # noqa: E402
    ensure_users_table,
    upsert_admin_user,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cria ou promove um administrador.")
    parser.add_argument("--email", required=True, help="Email do admin")
    parser.add_argument("--password", help="Senha do admin (obrigatória para conta nova)")
    parser.add_argument("--name", default="Admin", help="Nome do admin")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    try:
        ensure_users_table(engine)
    except RuntimeError as exc:
        print(str(exc))
        return 1

    db = SessionLocal()
    try:
        admin, created = upsert_admin_user(
            db,
            email=args.email,
            name=args.name,
            password=args.password,
        )
    except ValueError as exc:
        print(str(exc))
        return 1
    finally:
        db.close()

    action = "created" if created else "updated"
    print(f"Admin {action}: email={admin.email}")
    if IS_DEV:
        password_info = args.password if args.password else "<mantida>"
        print(f"Resumo DEV -> Email: {admin.email} | Senha: {password_info}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Reconcilia os cargos ADMIN com uma lista fixa de emails.

Substitui o antigo endpoint público de correção de cargos: roda só por
quem tem acesso ao banco.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from booking_app.core.config import ADMIN_EMAILS  # noqa: E402
from booking_app.core.database import SessionLocal  # noqa: E402
from booking_app.core.logging_setup import configure_logging  # noqa: E402
from booking_app.services.role_reconciliation import reconcile_admin_roles  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcilia cargos ADMIN.")
    parser.add_argument(
        "--email",
        action="append",
        default=[],
        help="Email que deve ser ADMIN (repita a flag; padrão: ADMIN_EMAILS)",
    )
    return parser.parse_args()


def main() -> int:
    configure_logging()
    args = parse_args()
    emails = args.email or ADMIN_EMAILS
    if not emails:
        print("Nenhum email informado. Use --email ou defina ADMIN_EMAILS.")
        return 1

    db = SessionLocal()
    try:
        result = reconcile_admin_roles(db, emails)
    finally:
        db.close()

    print(f"Promovidos: {', '.join(result.promoted) or '-'}")
    print(f"Rebaixados: {', '.join(result.demoted) or '-'}")
    if result.missing:
        print(f"Sem conta: {', '.join(result.missing)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

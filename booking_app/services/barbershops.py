from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy.orm import Session, selectinload

from booking_app.models.barbershop import Barbershop
from booking_app.services.errors import NotFound


def list_barbershops(db: Session) -> List[Dict[str, Any]]:
    shops = db.query(Barbershop).order_by(Barbershop.name.asc()).all()
    return [{"id": shop.id, "name": shop.name, "image_url": shop.image_url} for shop in shops]


def get_barbershop(db: Session, barbershop_id: str) -> Dict[str, Any]:
    shop = (
        db.query(Barbershop)
        .options(selectinload(Barbershop.services))
        .filter(Barbershop.id == barbershop_id)
        .first()
    )
    if shop is None:
        raise NotFound("Barbearia não encontrada")

    return {
        "id": shop.id,
        "name": shop.name,
        "address": shop.address,
        "description": shop.description,
        "image_url": shop.image_url,
        "phones": list(shop.phones or []),
        "services": [
            {
                "id": service.id,
                "name": service.name,
                "description": service.description,
                "image_url": service.image_url,
                "price": service.price,
            }
            for service in shop.services
        ],
    }

import uuid

from sqlalchemy import JSON, Column, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from booking_app.core.database import Base


class Barbershop(Base):
    __tablename__ = "barbershops"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    phones = Column(JSON, nullable=False, default=list)

    services = relationship(
        "BarbershopService",
        back_populates="barbershop",
        order_by="BarbershopService.name",
    )


class BarbershopService(Base):
    __tablename__ = "barbershop_services"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)

    barbershop = relationship("Barbershop", back_populates="services")

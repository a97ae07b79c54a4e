from servible.extensions import db
from .base import BaseModel

class Organization(BaseModel):
    __tablename__ = "organizations"

    # Basic info
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)
    logo = db.Column(db.String(512), nullable=True)

    # Contact details shown on the public site
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(64), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    address_line1 = db.Column(db.String(255), nullable=True)
    address_line2 = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(128), nullable=True)
    postal_code = db.Column(db.String(32), nullable=True)
    country = db.Column(db.String(2), nullable=True)

    # Business defaults
    locale = db.Column(db.String(16), default="en-US")
    timezone = db.Column(db.String(64), default="UTC")
    currency = db.Column(db.String(3), default="USD")
    default_tax_rate = db.Column(db.Numeric(5, 2), default=0)

    sites = db.relationship("Site", back_populates="organization")

    @property
    def address(self) -> str:
        parts = [self.address_line1, self.address_line2, self.postal_code, self.city]
        return ", ".join(p for p in parts if p)

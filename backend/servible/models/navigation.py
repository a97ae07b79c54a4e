from servible.extensions import db
from .base import BaseModel

class NavigationItem(BaseModel):
    __tablename__ = "navigation_items"

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    label = db.Column(db.String(100), nullable=False)
    href = db.Column(db.String(512), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    site = db.relationship("Site", back_populates="navigation")

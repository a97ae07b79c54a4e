from servible.extensions import db
from .base import BaseModel

class Theme(BaseModel):
    __tablename__ = "themes"

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), unique=True, nullable=False)
    template = db.Column(db.String(50), nullable=False, default="modern")
    color_mode = db.Column(db.String(10), nullable=False, default="light")  # light | dark
    font_heading = db.Column(db.String(100), nullable=True)
    font_body = db.Column(db.String(100), nullable=True)
    token_preset = db.Column(db.String(50), nullable=True)

    # Flat map of bare token name -> CSS value, e.g. {"radius-card": "1rem"}
    design_tokens = db.Column(db.JSON, default=dict)

    site = db.relationship("Site", back_populates="theme")

from servible.extensions import db
from .base import BaseModel

class Page(BaseModel):
    __tablename__ = 'pages'

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, default="", index=True)
    content = db.Column(db.JSON, nullable=False, default=lambda: {"blocks": []})
    is_homepage = db.Column(db.Boolean, nullable=False, default=False)
    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    meta_title = db.Column(db.String(255), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)

    # Bumped on every flush; a stale writer gets StaleDataError
    version = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_page_slug_per_site"),
    )
    __mapper_args__ = {"version_id_col": version}

    site = db.relationship("Site", back_populates="pages")

    @property
    def blocks(self) -> list:
        blocks = (self.content or {}).get("blocks")
        return blocks if isinstance(blocks, list) else []

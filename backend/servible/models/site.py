from servible.extensions import db
from .base import BaseModel
from .tenant_mixin import OrganizationMixin

SITE_DRAFT = "DRAFT"
SITE_PUBLISHED = "PUBLISHED"


class Site(BaseModel, OrganizationMixin):
    __tablename__ = "sites"

    name = db.Column(db.String(255), nullable=False)
    subdomain = db.Column(db.String(63), unique=True, nullable=False, index=True)
    custom_domain = db.Column(db.String(255), unique=True, nullable=True, index=True)
    status = db.Column(db.String(20), nullable=False, default=SITE_DRAFT, index=True)

    # Feature toggles
    blog_enabled = db.Column(db.Boolean, default=False)
    portal_enabled = db.Column(db.Boolean, default=False)
    booking_enabled = db.Column(db.Boolean, default=False)

    # Brand colors, stored as hex
    primary_color = db.Column(db.String(32), nullable=True)
    secondary_color = db.Column(db.String(32), nullable=True)

    # SEO
    description = db.Column(db.Text, nullable=True)
    meta_title = db.Column(db.String(255), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    og_image = db.Column(db.String(512), nullable=True)

    organization = db.relationship("Organization", back_populates="sites")
    theme = db.relationship("Theme", back_populates="site", uselist=False, cascade="all, delete-orphan")
    pages = db.relationship("Page", back_populates="site", cascade="all, delete-orphan")
    navigation = db.relationship(
        "NavigationItem",
        back_populates="site",
        order_by="NavigationItem.sort_order",
        cascade="all, delete-orphan"
    )

    @property
    def is_published(self) -> bool:
        return self.status == SITE_PUBLISHED

from servible.extensions import db
from .base import BaseModel
from .tenant_mixin import OrganizationMixin

class File(BaseModel, OrganizationMixin):
    __tablename__ = "files"

    name = db.Column(db.String(255), nullable=False)
    file_name = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(1024), nullable=False)
    mime_type = db.Column(db.String(100), nullable=True)
    size = db.Column(db.Integer, nullable=True)
    folder = db.Column(db.String(100), nullable=True)
    tags = db.Column(db.JSON, default=list)
    storage_provider = db.Column(db.String(32), nullable=False, default="LOCAL")
    storage_public_id = db.Column(db.String(512), nullable=True)

    client_id = db.Column(db.String(36), nullable=True, index=True)
    project_id = db.Column(db.String(36), nullable=True, index=True)

    # Filled in later by the file analyzer
    ai_description = db.Column(db.Text, nullable=True)
    ai_classification = db.Column(db.JSON, nullable=True)

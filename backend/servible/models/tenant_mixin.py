from servible.extensions import db

class OrganizationMixin:
    organization_id = db.Column(
        db.String(36),
        db.ForeignKey('organizations.id'),
        nullable=False,
        index=True
    )

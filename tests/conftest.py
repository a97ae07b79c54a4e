import pytest
from flask_jwt_extended import create_access_token

from servible import create_app
from servible.config import TestingConfig
from servible.extensions import db
from servible.models import NavigationItem, Organization, Page, Site, Theme
from servible.models.site import SITE_PUBLISHED


@pytest.fixture
def app(tmp_path, monkeypatch):
    # File database, so a second connection can act as a concurrent writer
    monkeypatch.setattr(TestingConfig, "SQLALCHEMY_DATABASE_URI", f"sqlite:///{tmp_path / 'test.db'}")
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def organization(app):
    org = Organization(
        name="Acme Plumbing",
        slug="acme-plumbing",
        email="hello@acme.test",
        phone="+1 555 0100",
        city="Springfield",
    )
    db.session.add(org)
    db.session.commit()
    return org


@pytest.fixture
def make_site(organization):
    def make(**overrides):
        values = {
            "organization_id": organization.id,
            "name": "Acme Plumbing",
            "subdomain": "acme",
            "primary_color": "#2563eb",
        }
        values.update(overrides)
        site = Site(**values)
        db.session.add(site)
        db.session.commit()
        return site
    return make


@pytest.fixture
def site(make_site):
    return make_site()


@pytest.fixture
def published_site(make_site):
    site = make_site(status=SITE_PUBLISHED)
    db.session.add(Theme(site_id=site.id, font_heading="Playfair Display", font_body="Inter"))
    db.session.add(NavigationItem(site_id=site.id, label="Services", href="/services", sort_order=1))
    db.session.commit()
    return site


@pytest.fixture
def make_page():
    def make(site, blocks=None, **overrides):
        values = {
            "site_id": site.id,
            "title": "Home",
            "slug": "",
            "is_homepage": True,
            "is_published": True,
            "content": {"blocks": blocks or []},
        }
        values.update(overrides)
        page = Page(**values)
        db.session.add(page)
        db.session.commit()
        return page
    return make


@pytest.fixture
def auth_headers(organization):
    def make(role="admin", tenant_id=None):
        token = create_access_token(
            identity="user-1",
            additional_claims={"tenant_id": tenant_id or organization.id, "role": role},
        )
        return {"Authorization": f"Bearer {token}", "X-Tenant-ID": organization.id}
    return make

from flask import current_app
from servible.enrichment import start_enrichment
from servible.utils.audit import log_action
from servible.utils.transaction import transactional


def request_image_enrichment(*, site):
    """Record the request and start the background enrichment run."""
    with transactional():
        log_action(
            action="site.enrich_images",
            entity_type="site",
            entity_id=site.id,
        )

    return start_enrichment(current_app._get_current_object(), site.id)

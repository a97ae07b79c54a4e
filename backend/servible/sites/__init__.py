from .preview import generate_preview_token, is_preview, preview_url
from .resolver import ResolvedSite, TenantKey, extract_tenant_key, find_site, lookup_site, resolve_host

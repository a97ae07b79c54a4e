from blinker import Namespace

_signals = Namespace()

# Sent with the app as sender and ``site_id`` once a site's rendered
# output may have changed.
site_content_changed = _signals.signal("site-content-changed")

"""Services: prober, resolver, dispatch, template, manifest, install."""

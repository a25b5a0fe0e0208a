# First path segments owned by the application. No vanity path, username or
# custom-domain request may ever resolve one of these to a tenant.
RESERVED_SEGMENTS = frozenset({
    'auth',
    'dashboard',
    'u',
    'l',
    'static',
    'media',
    'admin',
})

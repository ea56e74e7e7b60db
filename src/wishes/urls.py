WISHES_URL = "/api/v1/wishes"
WISH_REACTIONS_URL = "/api/v1/wishes/{wish_id}/reactions"

ADMIN_WISH_URL = "/api/v1/admin/wishes/{wish_id}"

SUBMIT_RSVP_URL = "/api/v1/rsvp"
MY_RSVP_URL = "/api/v1/rsvp/me"

ADMIN_DASHBOARD_URL = "/api/v1/admin/dashboard"
ADMIN_PARTICIPANTS_URL = "/api/v1/admin/participants"
ADMIN_IMPORT_PARTICIPANTS_URL = "/api/v1/admin/participants/import"

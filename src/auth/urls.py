LOGIN_URL = "/api/v1/auth/login"
REGISTER_URL = "/api/v1/auth/register"
SESSION_URL = "/api/v1/auth/session"
LOGOUT_URL = "/api/v1/auth/logout"
PROFILE_URL = "/api/v1/auth/profile"

from enum import Enum


class TableNames(str, Enum):
    APP_USERS = "app_users"
    RSVP_RESPONSES = "rsvp_responses"
    WISHES = "wishes"
    WISH_REACTIONS = "wish_reactions"

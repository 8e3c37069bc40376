EVENT_CREATE_SUCCESS = "Event created successfully"
EVENT_CREATE_FAILED = "Failed to create event"
EVENT_SUBMIT_IN_PROGRESS = "Event is already being saved"
USERS_LOAD_FAILED = "Failed to load users"
CALENDARS_LOAD_FAILED = "Failed to load calendars"

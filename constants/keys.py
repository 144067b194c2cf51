class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    FIRST_NAME = "ui.account.first_name"
    LAST_NAME = "ui.account.last_name"
    EMAIL = "ui.account.email"
    COUNTRY = "ui.account.country"
    LINKEDIN = "ui.account.linkedin"
    USE_PASSWORD = "ui.account.use_password"
    PASSWORD = "ui.account.password"
    DETECT_COUNTRY = "ui.account.detect_country"
    SUBMIT_ACCOUNT = "ui.account.submit"
    START_STEPPER = "ui.account.start"
    RESTORE_UPLOAD = "ui.account.restore_upload"
    RESTORE_SESSION = "ui.account.restore"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    SESSION = "wizard.session"
    SESSION_ID = "wizard.session_id"
    COUNTRY_PREFILL = "geo.country_prefill"
    SUBMITTED_PROFILE = "data.submitted_profile"
    ACCEPTED_PROFILE = "data.accepted_profile"

import os


os.environ.setdefault("ACTIVE_FORM_ENV", "testing")
os.environ.setdefault("ACTIVE_FORM_LOG_LEVEL", "DEBUG")

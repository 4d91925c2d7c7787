import os
import os.path
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from dotenv import load_dotenv  # isort:skip
load_dotenv()  # isort:skip

import sentry_sdk

from feedback_core.app.task import purge_expired_notifications

TASK_TO_RUN = os.getenv("TASK_TO_RUN")


if __name__ == "__main__":
    try:
        if TASK_TO_RUN == "purge_expired_notifications":
            purge_expired_notifications()
        else:
            raise Exception(f"Unknown task to run: {TASK_TO_RUN}")
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise

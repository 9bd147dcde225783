# toolshed/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from toolshed.tasks.due_check import run_due_check_job


def start_scheduler(app):
    """
    Starts the due-date reminder job.
    - Disabled with SCHEDULER_ENABLED=0 (tests, one-off CLI commands).
    - In debug mode only the reloader's serving process starts it.
    """
    if not app.config.get("SCHEDULER_ENABLED", True):
        app.logger.info("[scheduler] disabled by config.")
        return None

    # Werkzeug's reloader runs the app twice; WERKZEUG_RUN_MAIN marks the real one.
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    minutes = app.config.get("DUE_CHECK_INTERVAL_MINUTES", 10)
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        func=run_due_check_job,
        args=[app],
        trigger=IntervalTrigger(minutes=minutes),
        id="due_check_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=120,
    )

    try:
        scheduler.start()
    except Exception as e:
        app.logger.warning(f"[scheduler] could not start: {e}")
        return None

    app.logger.info(f"[scheduler] Due check job started (every {minutes} minutes).")
    app.extensions["apscheduler"] = scheduler
    atexit.register(lambda: scheduler.running and scheduler.shutdown(wait=False))
    return scheduler

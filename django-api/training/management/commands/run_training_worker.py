"""Batch worker for the training scheduler.

Meant to be run from cron or a process manager, e.g.
*/5 * * * * python manage.py run_training_worker
"""

import logging

from django.core.management.base import BaseCommand

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the training scheduler batch worker. No jobs are registered yet."

    def handle(self, *args, **options) -> None:
        logger.info("Starting training scheduler worker")
        logger.info("Training scheduler worker completed")

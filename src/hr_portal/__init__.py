"""HR portal: employee directory, time-off workflow, leave timeline and
birthday / work-anniversary notifications.

`hr_portal.main.create_app()` builds the Flask application.
"""

__version__ = "0.1.0"

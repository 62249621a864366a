"""
Shared module for cross-cutting concerns of the menu backend.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Roles, menu defaults, limits

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy engine, sessions, transaction()
  - correlation.py: X-Request-ID middleware and log filter

- shared.security: Authentication
  - auth.py: JWT verification, current_user_context

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input validation, SSRF prevention
  - schemas.py: Pydantic request/response schemas

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context
    from shared.infrastructure.db import get_db, transaction
    from shared.config.settings import settings
    from shared.config.constants import Roles, MENU_MANAGEMENT_ROLES
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""

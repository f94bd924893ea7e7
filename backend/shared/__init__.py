"""
Shared module for cross-cutting concerns of the menu API.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Limits, day-of-week numbering, patterns

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy engine and sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.security: Authentication
  - auth.py: JWT signing/verification, current_user_context
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting (slowapi)

- shared.utils: Utilities
  - exceptions.py: Domain exceptions with ErrorKind and auto-logging
  - result.py: ServiceResult envelope and service_operation decorator
  - validators.py: URL/slug validation, limit parsing
  - schemas.py: Auth and user account schemas

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context, get_user_id
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.utils.exceptions import NotFoundError, UnauthorizedError
    from shared.utils.result import ServiceResult, service_operation
"""

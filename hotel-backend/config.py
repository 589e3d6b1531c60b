import os

PRECHECK_POLICIES = ('fail-open', 'fail-closed')
FILTER_RESULT_KEYS = ('value', 'column')

class Config:
    def __init__(self, **overrides):
        # Database settings
        self.SQLALCHEMY_DATABASE_URI = overrides.get('SQLALCHEMY_DATABASE_URI', os.getenv('DATABASE_URL'))
        if not self.SQLALCHEMY_DATABASE_URI:
            raise ValueError("DATABASE_URL is not set in environment variables")
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.AUTO_CREATE_TABLES = overrides.get(
            'AUTO_CREATE_TABLES', os.getenv('AUTO_CREATE_TABLES', 'True').lower() == 'true')

        # Logging settings
        self.LOG_FILE = overrides.get('LOG_FILE', os.getenv('LOG_FILE', 'app.log')) or None
        self.LOG_LEVEL = overrides.get('LOG_LEVEL', os.getenv('LOG_LEVEL', 'INFO')).upper()

        # Request settings
        self.MAX_CONTENT_LENGTH = 1024 * 1024  # 1MB
        origins = overrides.get('CORS_ORIGINS', os.getenv('CORS_ORIGINS', '*'))
        if isinstance(origins, str):
            origins = [origin.strip() for origin in origins.split(',') if origin.strip()]
        self.CORS_ORIGINS = origins or ['*']

        # Booking pre-checks: ignore storage errors (fail-open) or raise them (fail-closed)
        self.PRECHECK_POLICY = overrides.get('PRECHECK_POLICY', os.getenv('PRECHECK_POLICY', 'fail-open')).lower()
        if self.PRECHECK_POLICY not in PRECHECK_POLICIES:
            raise ValueError(f"PRECHECK_POLICY must be one of {PRECHECK_POLICIES}")

        # Filter responses keyed by the filter value (legacy) or by the column name
        self.FILTER_RESULT_KEY = overrides.get('FILTER_RESULT_KEY', os.getenv('FILTER_RESULT_KEY', 'value')).lower()
        if self.FILTER_RESULT_KEY not in FILTER_RESULT_KEYS:
            raise ValueError(f"FILTER_RESULT_KEY must be one of {FILTER_RESULT_KEYS}")

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from lexaid.utils.errors import ServiceUnavailableError


class Database:
    def __init__(self):
        self.client = None
        self.db = None

    def initialize(self, app, client=None):
        """Initialize database connection"""
        uri = app.config.get('MONGODB_URI')
        if client is None:
            if not uri:
                app.logger.warning("MONGODB_URI not set. Persistence is unavailable.")
                self.client = None
                self.db = None
                return
            client = MongoClient(uri, serverSelectionTimeoutMS=5000)

        self.client = client
        self.db = self.client[app.config.get('MONGODB_DB_NAME', 'lexaid')]

        # Every listing is per owner, newest first
        try:
            self.db.users.create_index("email", unique=True)
            self.db.users.create_index("subscription_id")
            for name in ('drafts', 'clauses', 'cases'):
                self.db[name].create_index([("user_id", ASCENDING), ("last_modified", DESCENDING)])
        except PyMongoError as e:
            app.logger.error("Could not create indexes, is MongoDB reachable? %s", e)

    @property
    def is_configured(self):
        return self.db is not None

    def get_db(self):
        """Get database instance"""
        if self.db is None:
            raise ServiceUnavailableError("Database not configured.")
        return self.db

    def close(self):
        """Close database connection"""
        if self.client:
            self.client.close()
        self.client = None
        self.db = None


# Global database instance
db_instance = Database()

from flask_login import UserMixin
from pymongo.errors import DuplicateKeyError
from werkzeug.security import check_password_hash, generate_password_hash

from lexaid.config.database import db_instance
from lexaid.models.base import isoformat, to_object_id
from lexaid.utils.errors import NotFoundError, ValidationError
from lexaid.utils.timestamps import add_months, server_timestamp

TRIAL_PLAN_NAME = 'Free Trial'
TRIAL_PLAN_ID = 'trial'

SUBSCRIPTION_STATUSES = ('active', 'inactive', 'cancelled', 'past_due')

# Settings a user may change on their own profile
PROFILE_FIELDS = ('display_name', 'photo_url', 'phone_number', 'email_notifications', 'in_app_notifications')


def trial_subscription(now=None):
    """Subscription fields for a new one-month free trial"""
    now = now or server_timestamp()
    return {
        'subscription_plan': TRIAL_PLAN_NAME,
        'subscription_plan_id': TRIAL_PLAN_ID,
        'subscription_status': 'active',
        'subscription_start_date': now,
        'subscription_end_date': add_months(now, 1)
    }


class User(UserMixin):
    """Authenticated user and their profile, stored in the ``users`` collection.

    The string form of ``_id`` is the owner id that scopes every draft,
    clause and case query.
    """

    def __init__(self, email, password_hash=None, display_name=None, _id=None, photo_url=None,
                 phone_number=None, email_notifications=True, in_app_notifications=True,
                 subscription_plan=None, subscription_plan_id=None, subscription_id=None,
                 subscription_status=None, subscription_start_date=None, subscription_end_date=None,
                 created_at=None, last_modified=None):
        self.id = str(_id) if _id else None
        self.email = email
        self.password_hash = password_hash
        self.display_name = display_name
        self.photo_url = photo_url
        self.phone_number = phone_number
        self.email_notifications = email_notifications
        self.in_app_notifications = in_app_notifications
        self.subscription_plan = subscription_plan
        self.subscription_plan_id = subscription_plan_id
        self.subscription_id = subscription_id
        self.subscription_status = subscription_status  # active, inactive, cancelled, past_due
        self.subscription_start_date = subscription_start_date
        self.subscription_end_date = subscription_end_date
        self.created_at = created_at
        self.last_modified = last_modified

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if password is correct"""
        return bool(self.password_hash) and check_password_hash(self.password_hash, password)

    @staticmethod
    def create_profile(email, password, display_name=None):
        """Register a user with a default trial subscription"""
        db = db_instance.get_db()
        now = server_timestamp()

        user = User(
            email=email,
            display_name=display_name or email.split('@')[0] or 'New User',
            created_at=now,
            last_modified=now,
            **trial_subscription(now)
        )
        user.set_password(password)

        try:
            result = db.users.insert_one(user._document())
        except DuplicateKeyError:
            raise ValidationError("User with this email already exists")

        user.id = str(result.inserted_id)
        return user

    def ensure_subscription(self):
        """Back-fill the trial plan on profiles created before subscriptions existed"""
        if self.subscription_plan:
            return self
        updates = trial_subscription()
        User.update_profile(self.id, updates)
        for key, value in updates.items():
            setattr(self, key, value)
        return self

    @staticmethod
    def update_profile(user_id, data):
        """Merge profile changes and refresh last_modified"""
        db = db_instance.get_db()
        object_id = to_object_id(user_id)
        if object_id is None:
            raise NotFoundError("User not found.")

        updates = dict(data)
        updates['last_modified'] = server_timestamp()
        result = db.users.update_one({'_id': object_id}, {'$set': updates})
        if result.matched_count == 0:
            raise NotFoundError("User not found.")
        return User.find_by_id(user_id)

    @staticmethod
    def clean_settings(data):
        """Validate a settings edit without writing it. Only profile fields are kept."""
        updates = {key: value for key, value in (data or {}).items() if key in PROFILE_FIELDS}
        if 'display_name' in updates:
            updates['display_name'] = (updates['display_name'] or '').strip()
            if not updates['display_name']:
                raise ValidationError("Display name cannot be empty")
        for key in ('email_notifications', 'in_app_notifications'):
            if key in updates:
                updates[key] = bool(updates[key])
        return updates

    @staticmethod
    def update_subscription(user_id, plan_name, plan_id, transaction_id, monthly=False):
        """Activate a paid plan after a successful checkout"""
        db = db_instance.get_db()
        object_id = to_object_id(user_id)
        if object_id is None:
            raise NotFoundError("User not found.")

        now = server_timestamp()
        update = {
            '$set': {
                'subscription_plan': plan_name,
                'subscription_plan_id': plan_id,
                'subscription_id': transaction_id,
                'subscription_status': 'active',
                'subscription_start_date': now,
                'last_modified': now
            }
        }
        if monthly:
            update['$set']['subscription_end_date'] = add_months(now, 1)
        else:
            update['$unset'] = {'subscription_end_date': ''}

        result = db.users.update_one({'_id': object_id}, update)
        if result.matched_count == 0:
            raise NotFoundError("User not found.")
        return User.find_by_id(user_id)

    @staticmethod
    def find_by_email(email):
        """Find user by email"""
        db = db_instance.get_db()
        user_data = db.users.find_one({'email': email})
        return User.from_document(user_data) if user_data else None

    @staticmethod
    def find_by_subscription_id(transaction_id):
        db = db_instance.get_db()
        user_data = db.users.find_one({'subscription_id': str(transaction_id)})
        return User.from_document(user_data) if user_data else None

    @staticmethod
    def find_by_id(user_id):
        """Find user by ID"""
        object_id = to_object_id(user_id)
        if object_id is None:
            return None

        db = db_instance.get_db()
        user_data = db.users.find_one({'_id': object_id})
        return User.from_document(user_data) if user_data else None

    def change_password(self, new_password):
        self.set_password(new_password)
        User.update_profile(self.id, {'password_hash': self.password_hash})

    def check_new_email(self, new_email):
        """Validate an email change. Returns False when the address is unchanged."""
        if not new_email or '@' not in new_email:
            raise ValidationError("A valid email address is required")
        if new_email == self.email:
            return False
        if User.find_by_email(new_email):
            raise ValidationError("Email already taken")
        return True

    @staticmethod
    def from_document(data):
        return User(
            email=data['email'],
            password_hash=data.get('password_hash'),
            display_name=data.get('display_name'),
            _id=data['_id'],
            photo_url=data.get('photo_url'),
            phone_number=data.get('phone_number'),
            email_notifications=data.get('email_notifications', True),
            in_app_notifications=data.get('in_app_notifications', True),
            subscription_plan=data.get('subscription_plan'),
            subscription_plan_id=data.get('subscription_plan_id'),
            subscription_id=data.get('subscription_id'),
            subscription_status=data.get('subscription_status'),
            subscription_start_date=data.get('subscription_start_date'),
            subscription_end_date=data.get('subscription_end_date'),
            created_at=data.get('created_at'),
            last_modified=data.get('last_modified')
        )

    def _document(self):
        return {
            'email': self.email,
            'password_hash': self.password_hash,
            'display_name': self.display_name,
            'photo_url': self.photo_url,
            'phone_number': self.phone_number,
            'email_notifications': self.email_notifications,
            'in_app_notifications': self.in_app_notifications,
            'subscription_plan': self.subscription_plan,
            'subscription_plan_id': self.subscription_plan_id,
            'subscription_id': self.subscription_id,
            'subscription_status': self.subscription_status,
            'subscription_start_date': self.subscription_start_date,
            'subscription_end_date': self.subscription_end_date,
            'created_at': self.created_at,
            'last_modified': self.last_modified
        }

    def to_dict(self):
        """Convert user to dictionary"""
        return {
            'uid': self.id,
            'email': self.email,
            'display_name': self.display_name,
            'photo_url': self.photo_url,
            'phone_number': self.phone_number,
            'email_notifications': self.email_notifications,
            'in_app_notifications': self.in_app_notifications,
            'subscription_plan': self.subscription_plan,
            'subscription_plan_id': self.subscription_plan_id,
            'subscription_id': self.subscription_id,
            'subscription_status': self.subscription_status,
            'subscription_start_date': isoformat(self.subscription_start_date),
            'subscription_end_date': isoformat(self.subscription_end_date),
            'created_at': isoformat(self.created_at)
        }

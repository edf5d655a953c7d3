import logging
import os

from dotenv import load_dotenv
from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from flask_cors import CORS
from flask_login import LoginManager, current_user, login_required
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from lexaid.agents.drafting_agent import DEFAULT_MODEL
from lexaid.config.database import db_instance
from lexaid.config.documents import ALL_DOCUMENT_FIELDS_CONFIG, get_document_type, search_document_types
from lexaid.config.plans import PLANS
from lexaid.models.case import Case, CasePriority, CaseStatus
from lexaid.models.clause import Clause
from lexaid.models.draft import Draft
from lexaid.models.user import User
from lexaid.routes.auth import auth_bp
from lexaid.routes.billing import billing_bp
from lexaid.routes.cases import cases_bp
from lexaid.routes.clauses import clauses_bp
from lexaid.routes.documents import documents_bp
from lexaid.routes.drafts import drafts_bp
from lexaid.utils.errors import LexAidError
from lexaid.utils.forms import form_fields

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def create_app(config=None, mongo_client=None):
    """Application factory.

    ``config`` overrides settings read from the environment, and
    ``mongo_client`` replaces the client built from MONGODB_URI.
    """
    app = Flask(__name__,
                template_folder='../frontend/templates',
                static_folder='../frontend/static')

    # Configuration
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'change-me-in-production')
    app.config['MONGODB_URI'] = os.getenv('MONGODB_URI', 'mongodb://localhost:27017/lexaid')
    app.config['MONGODB_DB_NAME'] = os.getenv('MONGODB_DB_NAME', 'lexaid')
    app.config['GOOGLE_API_KEY'] = os.getenv('GOOGLE_API_KEY')
    app.config['GEMINI_MODEL'] = os.getenv('GEMINI_MODEL', DEFAULT_MODEL)
    app.config['FLUTTERWAVE_PUBLIC_KEY'] = os.getenv('FLUTTERWAVE_PUBLIC_KEY')
    app.config['FLUTTERWAVE_SECRET_KEY'] = os.getenv('FLUTTERWAVE_SECRET_KEY')
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Initialize extensions
    CORS(app, supports_credentials=True)

    # Initialize database
    db_instance.initialize(app, client=mongo_client)

    # Initialize Flask-Login
    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.login_view = 'login_page'
    login_manager.login_message = 'Please log in to access this page.'

    @login_manager.user_loader
    def load_user(user_id):
        if not db_instance.is_configured:
            return None
        return User.find_by_id(user_id)

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(documents_bp, url_prefix='/api/documents')
    app.register_blueprint(drafts_bp, url_prefix='/api/drafts')
    app.register_blueprint(clauses_bp, url_prefix='/api/clauses')
    app.register_blueprint(cases_bp, url_prefix='/api/cases')
    app.register_blueprint(billing_bp, url_prefix='/api/billing')

    # Frontend routes
    @app.route('/')
    def login_page():
        if current_user.is_authenticated:
            return redirect(url_for('dashboard'))
        return render_template('login.html')

    @app.route('/register')
    def register_page():
        return render_template('register.html')

    @app.route('/dashboard')
    @login_required
    def dashboard():
        term = request.args.get('q', '')
        return render_template('dashboard.html', document_types=search_document_types(term), search_term=term)

    @app.route('/draft/<document_slug>')
    @login_required
    def draft_page(document_slug):
        document_type = get_document_type(document_slug)
        if document_type is None:
            flash('Document type configuration not found.', 'error')
            return redirect(url_for('dashboard'))
        return render_template(
            'draft.html',
            document_type=document_type,
            fields=form_fields(document_type, ALL_DOCUMENT_FIELDS_CONFIG),
            cases=_owned_or_empty(Case)
        )

    @app.route('/drafts')
    @login_required
    def drafts_page():
        return render_template('drafts.html', drafts=_owned_or_empty(Draft))

    @app.route('/clauses')
    @login_required
    def clauses_page():
        return render_template('clauses.html', clauses=_owned_or_empty(Clause))

    @app.route('/cases')
    @login_required
    def cases_page():
        return render_template(
            'cases.html',
            cases=_owned_or_empty(Case),
            statuses=[status.value for status in CaseStatus],
            priorities=[priority.value for priority in CasePriority]
        )

    @app.route('/billing')
    @login_required
    def billing_page():
        return render_template('billing.html', plans=PLANS, user=current_user)

    @app.route('/settings')
    @login_required
    def settings_page():
        return render_template('settings.html', user=current_user)

    @app.route('/help')
    @login_required
    def help_page():
        return render_template('help.html')

    # Error handlers
    @app.errorhandler(LexAidError)
    def lexaid_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(PyMongoError)
    def database_error(error):
        logger.error("Database error on %s %s: %s", request.method, request.path, error)
        return jsonify({'error': 'Service unavailable. Please try again later.'}), 503

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api/'):
            return jsonify({'error': 'Not found'}), 404
        return render_template('404.html'), 404

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({'error': 'Internal server error'}), 500

    return app


def _owned_or_empty(model):
    """The current user's records for a page; empty when the database is down"""
    if not db_instance.is_configured:
        flash('Service unavailable. Your saved items cannot be loaded right now.', 'error')
        return []
    return model.find_by_user_id(current_user.id)


if __name__ == '__main__':
    app = create_app()

    if not app.config['GOOGLE_API_KEY']:
        logger.warning("GOOGLE_API_KEY not set. AI features will not work.")

    logger.info("Starting LexAid Nigeria...")

    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=os.getenv('FLASK_ENV') == 'development'
    )

"""
Application Flask pour l'interface web du suivi d'inventaire

Cette application fournit les pages de connexion, les listes des spindles
et des yedeks avec recherche, les formulaires d'ajout et de modification,
la suppression et l'export combiné.
"""

import logging
from typing import Optional

from flask import Flask, Response, abort, g, redirect, render_template, request, url_for

from ..core.config import TrackerConfig
from ..core.export import EXPORT_FILENAME, build_export
from ..core.logger import TrackerLogger
from ..core.query import filter_by_reference
from ..core.store import open_stores
from .forms import (
    DATE_PLACEHOLDER, KINDS, SPINDLE_KIND, RecordKind,
    form_values, missing_required, read_form, today,
)
from .sessions import SessionStore


SESSION_COOKIE = 'sid'
PUBLIC_ENDPOINTS = ('login', 'logout')

LOGIN_FAILED_MESSAGE = 'Kullanıcı adı veya şifre hatalı.'
REQUIRED_MESSAGE = '{} alanı zorunludur.'


def _check_record_id(record_id: str):
    """Les identifiants d'URL sont composés uniquement de chiffres"""
    if not (record_id.isascii() and record_id.isdigit()):
        abort(404)


class TrackerWebApp:
    """
    Application web Flask du suivi d'inventaire

    Cette classe encapsule l'application Flask, les deux stores et le
    SessionStore. Les routes sont enregistrées dans _register_routes.
    """

    def __init__(self, config: Optional[TrackerConfig] = None, config_path: Optional[str] = None):
        """
        Initialise l'application web

        Args:
            config: Configuration déjà chargée (prioritaire)
            config_path: Chemin vers le fichier de configuration
        """
        # Configuration
        self.config = config or TrackerConfig(config_path)

        # Logger
        self.logger = TrackerLogger(self.config)
        self.app_logger = self.logger.get_logger().getChild('web')

        # Données et sessions
        self.stores = open_stores(self.config, self.logger.get_logger())
        auth_config = self.config.get_auth_config()
        self.credentials = (auth_config['username'], auth_config['password'])
        self.sessions = SessionStore(auth_config['session_lifetime'])

        self.title = self.config.get('app', 'title')

        # Application Flask
        self.app = Flask(__name__)

        # Désactiver les logs Flask pour éviter la pollution
        logging.getLogger('werkzeug').setLevel(logging.ERROR)

        self._register_routes()

        self.app_logger.info("Interface web initialisée")

    def store_for(self, kind: RecordKind):
        return getattr(self.stores, kind.name)

    def _register_routes(self):
        """
        Enregistre toutes les routes Flask

        Toute route hors connexion/déconnexion exige une session valide,
        y compris les chemins inconnus.
        """
        @self.app.before_request
        def require_session():
            purged = self.sessions.purge_expired()
            if purged:
                self.app_logger.debug(f"{purged} session(s) expirée(s) supprimée(s)")
            if request.endpoint in PUBLIC_ENDPOINTS:
                return None
            user_session = self.sessions.get(request.cookies.get(SESSION_COOKIE))
            if user_session is None:
                return redirect(url_for('login'))
            g.user_session = user_session
            return None

        @self.app.context_processor
        def inject_layout():
            return {
                'app_title': self.title,
                'logged_in': g.get('user_session') is not None,
                'date_placeholder': DATE_PLACEHOLDER,
            }

        @self.app.route('/login', methods=['GET', 'POST'])
        def login():
            if request.method == 'GET':
                return render_template('login.html')

            username = request.form.get('username', '')
            password = request.form.get('password', '')
            if (username, password) != self.credentials:
                self.app_logger.warning(f"Échec de connexion pour '{username}'")
                return render_template('login.html', message={'type': 'danger', 'text': LOGIN_FAILED_MESSAGE})

            token = self.sessions.create(username)
            self.app_logger.info(f"Connexion de {username}")
            response = redirect(url_for('spindles_list'))
            response.set_cookie(SESSION_COOKIE, token, httponly=True, path='/')
            return response

        @self.app.route('/logout')
        def logout():
            self.sessions.destroy(request.cookies.get(SESSION_COOKIE))
            response = redirect(url_for('login'))
            response.delete_cookie(SESSION_COOKIE, path='/')
            return response

        @self.app.route('/')
        def index():
            return self._render_list(SPINDLE_KIND)

        for kind in KINDS:
            self._register_kind_routes(kind)

        @self.app.route('/export')
        def export():
            content = build_export(self.stores.spindles.list(), self.stores.yedeks.list())
            self.app_logger.info("Export combiné téléchargé")
            return Response(
                content,
                content_type='text/csv; charset=utf-8',
                headers={'Content-Disposition': f'attachment; filename="{EXPORT_FILENAME}"'}
            )

        @self.app.errorhandler(404)
        def not_found(error):
            return Response('Not Found', status=404, content_type='text/plain; charset=utf-8')

        @self.app.errorhandler(OSError)
        def storage_error(error):
            self.app_logger.exception(f"Erreur d'accès aux fichiers de données: {error}")
            return Response('Veri dosyasına erişilemedi.', status=500, content_type='text/plain; charset=utf-8')

    def _register_kind_routes(self, kind: RecordKind):
        """
        Enregistre liste, ajout, modification et suppression pour un type

        Args:
            kind: Description du type (préfixe d'URL et noms de routes)
        """
        store = self.store_for(kind)
        list_endpoint = f'{kind.name}_list'

        def list_view():
            return self._render_list(kind)

        def add_view():
            date = today()
            if request.method == 'GET':
                return self._render_form(kind, 'add', form_values(kind, None, date))

            missing = missing_required(kind, request.form)
            if missing:
                return self._render_form(kind, 'add', request.form.to_dict(), missing)

            record_id = store.add(read_form(kind, request.form, adding=True, date=date))
            self.app_logger.info(f"{kind.name}: enregistrement {record_id} ajouté")
            return redirect(url_for(list_endpoint))

        def edit_view(record_id):
            _check_record_id(record_id)
            record = store.get(record_id)
            if record is None:
                return redirect(url_for(list_endpoint))

            date = today()
            if request.method == 'GET':
                return self._render_form(kind, 'edit', form_values(kind, record, date))

            missing = missing_required(kind, request.form)
            if missing:
                return self._render_form(kind, 'edit', request.form.to_dict(), missing)

            store.update(record_id, read_form(kind, request.form, adding=False, date=date))
            self.app_logger.info(f"{kind.name}: enregistrement {record_id} modifié")
            return redirect(url_for(list_endpoint))

        def delete_view(record_id):
            _check_record_id(record_id)
            if store.delete(record_id):
                self.app_logger.info(f"{kind.name}: enregistrement {record_id} supprimé")
            return redirect(url_for(list_endpoint))

        prefix = f'/{kind.name}'
        self.app.add_url_rule(prefix, list_endpoint, list_view)
        self.app.add_url_rule(f'{prefix}/add', f'{kind.name}_add', add_view, methods=['GET', 'POST'])
        self.app.add_url_rule(f'{prefix}/<record_id>/edit', f'{kind.name}_edit', edit_view,
                              methods=['GET', 'POST'])
        self.app.add_url_rule(f'{prefix}/<record_id>/delete', f'{kind.name}_delete', delete_view,
                              methods=['POST'])

    def _render_list(self, kind: RecordKind):
        query = request.args.get('q', '').strip()
        records = filter_by_reference(self.store_for(kind).list(), query)
        return render_template('records.html', kind=kind, records=records, query=query)

    def _render_form(self, kind: RecordKind, mode: str, values, missing=None):
        message = None
        if missing:
            message = {'type': 'warning', 'text': REQUIRED_MESSAGE.format(', '.join(missing))}
        return render_template('record_form.html', kind=kind, mode=mode, values=values, message=message)

    def run(self, host=None, port=None, debug=False):
        """
        Lance l'application Flask

        Args:
            host: Adresse d'écoute (par défaut celle de la configuration)
            port: Port d'écoute (par défaut celui de la configuration)
            debug: Mode debug Flask
        """
        web_config = self.config.get_web_config()
        host = host or web_config['host']
        port = port or web_config['port']

        self.app_logger.info(f"Démarrage interface web sur http://{host}:{port}")

        try:
            self.app.run(
                host=host,
                port=port,
                debug=debug,
                threaded=False,  # une requête à la fois
                use_reloader=False
            )

        except OSError as e:
            self.app_logger.error(f"Erreur démarrage interface web: {e}")
            raise


def create_app(config_path=None):
    """
    Factory function pour créer l'application Flask

    Args:
        config_path: Chemin vers le fichier de configuration

    Returns:
        Flask: Application Flask prête à servir
    """
    return TrackerWebApp(config_path=config_path).app

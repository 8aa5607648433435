"""
Module de configuration pour le suivi d'inventaire

Ce module gère la configuration de l'application, incluant :
- Lecture du fichier de configuration INI
- Surcharge par les variables d'environnement PORT et HOST
- Validation des paramètres
- Valeurs par défaut
"""

import os
import configparser
from typing import Dict, Any, Optional


DEFAULT_CONFIG_FILE = "sts.ini"


class TrackerConfig:
    """
    Gestionnaire de configuration du suivi d'inventaire

    Cette classe centralise toute la configuration : interface web,
    fichiers de données, identifiants et journalisation.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialise la configuration

        Args:
            config_file: Chemin vers le fichier de configuration (optionnel)
        """
        self.config = configparser.ConfigParser()
        self.config_file = config_file or DEFAULT_CONFIG_FILE

        # Définir les valeurs par défaut
        self._set_defaults()

        # Charger la configuration depuis le fichier
        self._load_config()

        # Les variables d'environnement ont le dernier mot
        self._apply_environment()

    def _set_defaults(self):
        """
        Définit les valeurs de configuration par défaut

        Ces valeurs sont utilisées si aucun fichier de configuration n'est trouvé
        ou si certaines sections/clés sont manquantes.
        """
        # Configuration interface web
        self.config.add_section('web_interface')
        self.config.set('web_interface', 'host', '0.0.0.0')
        self.config.set('web_interface', 'port', '5000')

        # Fichiers de données
        self.config.add_section('storage')
        self.config.set('storage', 'data_dir', '.')
        self.config.set('storage', 'spindle_file', 'spindle_data.csv')
        self.config.set('storage', 'yedek_file', 'yedek_data.csv')

        # Identifiant partagé
        self.config.add_section('auth')
        self.config.set('auth', 'username', 'BAKIM')
        self.config.set('auth', 'password', 'MAXIME')
        self.config.set('auth', 'session_lifetime', '28800')  # 8 heures

        # Application
        self.config.add_section('app')
        self.config.set('app', 'title', 'STS - Spindle Takip Sistemi (Web)')
        self.config.set('app', 'log_level', 'INFO')

        # Configuration logging
        self.config.add_section('logging')
        self.config.set('logging', 'log_file', os.path.join('logs', 'sts.log'))
        self.config.set('logging', 'max_log_size', '10485760')  # 10MB
        self.config.set('logging', 'backup_count', '5')

    def _load_config(self):
        """
        Charge la configuration depuis le fichier

        Si le fichier n'existe pas, utilise les valeurs par défaut.
        En cas d'erreur de lecture, affiche l'erreur et continue avec les défauts.
        """
        try:
            if os.path.exists(self.config_file):
                self.config.read(self.config_file, encoding='utf-8')
                print(f"Configuration chargée depuis: {self.config_file}")
            else:
                print(f"Fichier de configuration non trouvé: {self.config_file}")
                print("Utilisation des valeurs par défaut")

        except configparser.Error as e:
            print(f"Erreur lors du chargement de la configuration: {e}")
            print("Utilisation des valeurs par défaut")

    def _apply_environment(self):
        """Applique les surcharges PORT et HOST de l'environnement"""
        port = os.environ.get('PORT')
        if port:
            self.config.set('web_interface', 'port', port)

        host = os.environ.get('HOST')
        if host:
            self.config.set('web_interface', 'host', host)

    def get(self, section: str, option: str, fallback: Any = None) -> str:
        """
        Récupère une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            fallback: Valeur par défaut si non trouvée

        Returns:
            str: Valeur de configuration
        """
        return self.config.get(section, option, fallback=fallback)

    def getint(self, section: str, option: str, fallback: int = 0) -> int:
        """
        Récupère une valeur entière de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            fallback: Valeur par défaut si non trouvée

        Returns:
            int: Valeur entière
        """
        return self.config.getint(section, option, fallback=fallback)

    def set(self, section: str, option: str, value):
        """
        Définit une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            value: Nouvelle valeur
        """
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, option, str(value))

    def save(self):
        """
        Sauvegarde la configuration dans le fichier

        Crée les dossiers parents si nécessaire. Les erreurs d'écriture
        sont remontées à l'appelant.
        """
        config_dir = os.path.dirname(self.config_file)
        if config_dir and not os.path.exists(config_dir):
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            self.config.write(f)

        print(f"Configuration sauvegardée dans: {self.config_file}")

    def get_web_config(self) -> Dict[str, Any]:
        """
        Récupère la configuration complète de l'interface web

        Returns:
            dict: Configuration interface web
        """
        return {
            'host': self.get('web_interface', 'host', '0.0.0.0'),
            'port': self.getint('web_interface', 'port', 5000)
        }

    def get_storage_config(self) -> Dict[str, Any]:
        """
        Récupère les chemins complets des fichiers de données

        Returns:
            dict: Dossier de données et chemin de chaque fichier
        """
        data_dir = self.get('storage', 'data_dir', '.')
        return {
            'data_dir': data_dir,
            'spindle_path': os.path.join(data_dir, self.get('storage', 'spindle_file')),
            'yedek_path': os.path.join(data_dir, self.get('storage', 'yedek_file'))
        }

    def get_auth_config(self) -> Dict[str, Any]:
        """
        Récupère l'identifiant partagé et la durée de session

        Returns:
            dict: Configuration d'authentification
        """
        return {
            'username': self.get('auth', 'username', ''),
            'password': self.get('auth', 'password', ''),
            'session_lifetime': self.getint('auth', 'session_lifetime', 28800)
        }

    def validate(self) -> bool:
        """
        Valide la configuration courante

        Returns:
            bool: True si la configuration est valide, False sinon
        """
        errors = []

        # Valider le port web
        try:
            web_port = self.getint('web_interface', 'port')
            if not (1 <= web_port <= 65535):
                errors.append("Port interface web invalide (doit être entre 1 et 65535)")
        except ValueError:
            errors.append("Port interface web invalide (doit être un entier)")

        # Valider le niveau de log
        log_level = self.get('app', 'log_level')
        if log_level not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            errors.append("Niveau de log invalide")

        # Valider l'identifiant partagé
        if not self.get('auth', 'username') or not self.get('auth', 'password'):
            errors.append("Nom d'utilisateur et mot de passe requis")

        try:
            if self.getint('auth', 'session_lifetime') <= 0:
                errors.append("Durée de session invalide (doit être positive)")
        except ValueError:
            errors.append("Durée de session invalide (doit être un entier)")

        if errors:
            for error in errors:
                print(f"Erreur de configuration: {error}")
            return False

        return True


# Fonction utilitaire pour créer une configuration par défaut
def create_default_config(config_path: str) -> TrackerConfig:
    """
    Crée un fichier de configuration par défaut

    Args:
        config_path: Chemin où créer le fichier de configuration

    Returns:
        TrackerConfig: Instance de configuration créée
    """
    config = TrackerConfig(config_path)
    config.save()
    return config

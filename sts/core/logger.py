"""
Module de logging pour le suivi d'inventaire

Ce module fournit un système de logging centralisé avec :
- Rotation automatique des logs
- Différents niveaux de log
- Formatage cohérent
"""

import os
import sys
import logging
import logging.handlers


LOGGER_NAME = 'STS'


class TrackerLogger:
    """
    Gestionnaire de logging de l'application

    Cette classe configure le logger nommé 'STS'. Les composants utilisent
    des loggers enfants ('STS.store', 'STS.web') qui remontent vers lui.
    """

    def __init__(self, config=None):
        """
        Initialise le système de logging

        Args:
            config: Instance de TrackerConfig pour récupérer les paramètres de log
        """
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)

        # Éviter la duplication si déjà configuré
        if not self.logger.handlers:
            self._setup_logging()

    def _setup_logging(self):
        """
        Configure le système de logging avec les handlers appropriés

        Configure :
        - Le niveau de log basé sur la configuration
        - La rotation des fichiers de log
        - La sortie console
        """
        if self.config:
            log_level_str = self.config.get('app', 'log_level', 'INFO')
            log_file = self.config.get('logging', 'log_file')
            max_size = self.config.getint('logging', 'max_log_size', 10485760)  # 10MB
            backup_count = self.config.getint('logging', 'backup_count', 5)
        else:
            log_level_str = 'INFO'
            log_file = os.path.join('logs', 'sts.log')
            max_size = 10485760  # 10MB
            backup_count = 5

        log_level = getattr(logging, log_level_str.upper(), logging.INFO)
        self.logger.setLevel(log_level)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Handler pour fichier avec rotation
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        except OSError as e:
            print(f"Erreur lors de la configuration du logging fichier: {e}")

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(fmt='%(levelname)s - %(message)s'))
        self.logger.addHandler(console_handler)

        self.logger.info("Système de logging initialisé")
        if self.config:
            self.logger.info(f"Niveau de log: {log_level_str}")
            self.logger.info(f"Fichier de log: {log_file}")

    def get_logger(self) -> logging.Logger:
        """
        Retourne l'instance du logger

        Returns:
            logging.Logger: Instance du logger configuré
        """
        return self.logger

    def log_config_info(self, config):
        """
        Log les informations de configuration (sans le mot de passe)

        Args:
            config: Instance de TrackerConfig
        """
        self.logger.info("=== Configuration STS ===")

        for key, value in config.get_web_config().items():
            self.logger.info(f"Web.{key}: {value}")

        for key, value in config.get_storage_config().items():
            self.logger.info(f"Storage.{key}: {value}")

        auth_config = config.get_auth_config()
        self.logger.info(f"Auth.username: {auth_config['username']}")
        self.logger.info(f"Auth.session_lifetime: {auth_config['session_lifetime']}s")

        self.logger.info("=== Fin configuration ===")


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Fonction utilitaire pour récupérer un logger nommé

    Args:
        name: Nom du logger

    Returns:
        logging.Logger: Instance du logger
    """
    return logging.getLogger(name)

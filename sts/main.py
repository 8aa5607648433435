"""
Point d'entrée principal de STS

Ce module peut être exécuté de différentes manières :
- Lancement de l'interface web (mode par défaut)
- Création ou validation d'un fichier de configuration
- Export combiné vers un fichier
"""

import argparse
import sys

from sts.core.config import TrackerConfig, create_default_config
from sts.core.export import build_export
from sts.web.app import TrackerWebApp


def export_to_file(web_app: TrackerWebApp, output_path: str):
    """
    Écrit l'export combiné des deux stores dans un fichier

    Args:
        web_app: Application dont les stores sont exportés
        output_path: Fichier de destination
    """
    content = build_export(web_app.stores.spindles.list(), web_app.stores.yedeks.list())
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    web_app.app_logger.info(f"Export écrit dans {output_path}")


def main(argv=None):
    """
    Point d'entrée principal avec gestion des arguments de ligne de commande
    """
    parser = argparse.ArgumentParser(
        description='STS - Spindle Takip Sistemi, suivi des spindles et yedeks'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Chemin vers le fichier de configuration'
    )

    parser.add_argument(
        '--create-config',
        action='store_true',
        help='Crée un fichier de configuration par défaut'
    )

    parser.add_argument(
        '--validate-config',
        action='store_true',
        help='Valide la configuration actuelle'
    )

    parser.add_argument(
        '--export', '-e',
        type=str,
        metavar='FICHIER',
        help='Écrit l\'export combiné dans FICHIER puis quitte'
    )

    parser.add_argument('--host', type=str, help='Adresse d\'écoute de l\'interface web')
    parser.add_argument('--port', '-p', type=int, help='Port d\'écoute de l\'interface web')

    args = parser.parse_args(argv)

    # Créer une configuration par défaut
    if args.create_config:
        config_path = args.config or 'sts.ini'
        try:
            create_default_config(config_path)
            print(f"✅ Configuration par défaut créée: {config_path}")
            return 0
        except OSError as e:
            print(f"❌ Erreur création configuration: {e}")
            return 1

    config = TrackerConfig(args.config)
    if args.host:
        config.set('web_interface', 'host', args.host)
    if args.port:
        config.set('web_interface', 'port', args.port)

    # Valider la configuration
    if args.validate_config:
        if config.validate():
            print("✅ Configuration valide")
            return 0
        print("❌ Configuration invalide")
        return 1

    if not config.validate():
        print("❌ Configuration invalide")
        return 1

    try:
        web_app = TrackerWebApp(config)
    except (OSError, ValueError) as e:
        print(f"❌ Erreur initialisation: {e}")
        return 1

    if args.export:
        try:
            export_to_file(web_app, args.export)
        except OSError as e:
            print(f"❌ Erreur export: {e}")
            return 1
        print(f"✅ Export sauvegardé dans: {args.export}")
        return 0

    web_app.logger.log_config_info(config)

    try:
        web_app.run()
    except KeyboardInterrupt:
        print("\n🛑 Arrêt demandé par l'utilisateur")
    except (OSError, ValueError) as e:
        print(f"❌ Erreur: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

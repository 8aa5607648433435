"""
Package interface web du suivi d'inventaire

Ce package fournit l'interface web Flask permettant :
- De se connecter avec l'identifiant partagé
- De lister, ajouter, modifier et supprimer spindles et yedeks
- De télécharger l'export combiné des deux listes
"""

"""
Configuration du logging de l'annotateur.
"""
import logging

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Bibliothèques dont les logs DEBUG noient ceux de l'annotateur.
QUIET_LOGGERS = ('PIL', 'skimage')


def configure_logging(log_level: str = 'INFO', log_file: str = None, *, logger_name: str = 'annotator') -> logging.Logger:
    """
    Configure le logger racine et retourne le logger de l'annotateur.

    Args:
        log_level: Niveau de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Chemin vers le fichier de log UTF-8 (optionnel)
        logger_name: Nom du logger applicatif à retourner

    Raises:
        ValueError: Si le niveau de log est inconnu
    """
    level_name = str(log_level).upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Niveau de log inconnu: {log_level!r} (attendu: {', '.join(LOG_LEVELS)})")
    level = getattr(logging, level_name)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Les bibliothèques restent au moins en WARNING, même en DEBUG.
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger

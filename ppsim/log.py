import sys
import logging
import logging.handlers


LOG_FORMAT = '%(asctime)s %(levelname)s %(module)s %(funcName)s %(lineno)d: %(message)s'
DATE_FORMAT = "[%d/%m/%Y %H:%M]"


def set_logger(name="ppsim", level=logging.INFO, filename=None):
    logger = logging.getLogger(name)
    logger.setLevel(level)

    log_format = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(log_format)
    stdout_handler.setLevel(level)
    logger.addHandler(stdout_handler)

    if filename:
        fhandler = logging.handlers.RotatingFileHandler(
            filename=filename, encoding='utf-8', mode='a',
            maxBytes=10**7, backupCount=5)
        fhandler.setFormatter(log_format)
        logger.addHandler(fhandler)

    return logger


def set_logger_from_config(config):
    log_config = config.get('logging', {})
    level = logging.getLevelName(str(log_config.get('level', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO
    return set_logger(level=level, filename=log_config.get('file'))

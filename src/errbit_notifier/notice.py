"""Notice building from classified errors and a config snapshot."""

from errbit_notifier.classifier import RawError, classify
from errbit_notifier.config import Config
from errbit_notifier.models import Context, Notice, NotifierInfo, Severity


def context_from_config(config: Config) -> Context:
    """Build a notice context holding the reporting process identity.

    Request and user fields are left unset.
    """
    return Context(
        notifier=NotifierInfo(),
        environment=config.environment,
        os=config.app_os,
        hostname=config.app_hostname,
        language=config.app_language,
        version=config.app_version,
        root_directory=config.app_root_directory,
    )


def build_notice(raw: RawError, config: Config) -> Notice:
    """Build an error-severity notice for a single error."""
    context = context_from_config(config)
    context.severity = Severity.ERROR
    return Notice(errors=[classify(raw)], context=context)

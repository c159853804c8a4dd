from pathlib import Path

from ampsparam.core import RunConfiguration
from ampsparam.exceptions import FormatRejectedError
from ampsparam.hydrate import hydrate
from ampsparam.parsers import KeywordMap, parse_param_file, sanity_check
from ampsparam.utils import logger

DEFAULT_SOURCE_NAME = "AMPS_PARAM.in"


def load_param_text(
    text: str,
    config: RunConfiguration,
    *,
    source_name: str = DEFAULT_SOURCE_NAME,
    kp_strategy: str = "linear",
) -> KeywordMap:
    """
    Load AMPS_PARAM.in text into an existing run configuration.

    The sanity gate runs first; rejected text leaves `config` untouched. Accepted
    text is parsed and hydrated into `config` in place.

    Args:
        text: Full file content.
        config: Configuration to update.
        source_name: Name used in log messages.
        kp_strategy: Dst to Kp conversion, see `ampsparam.physics.KP_STRATEGIES`.

    Returns:
        The parsed keyword map.

    Raises:
        FormatRejectedError: If the text has none of the expected section headers.
    """
    check = sanity_check(text)
    if not check:
        logger.warning(f"Rejected {source_name}: {check.message}")
        raise FormatRejectedError(check.message)

    kmap = parse_param_file(text)
    hydrate(kmap, config, kp_strategy=kp_strategy)
    logger.info(
        f"Loaded {source_name}: {len(kmap)} keywords, {len(kmap.points)} point entries, "
        f"output mode {config.output_mode}."
    )
    return kmap


def load_param_file(path: str | Path, config: RunConfiguration, *, kp_strategy: str = "linear") -> KeywordMap:
    """
    Read an AMPS_PARAM.in file from disk and load it into `config`.

    Raises:
        FileNotFoundError: If the path does not exist.
        FormatRejectedError: If the file is not in AMPS_PARAM.in format.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Parameter file not found: {path}")
    logger.debug(f"Reading parameter file {path}")
    return load_param_text(path.read_text(encoding="utf-8"), config, source_name=path.name, kp_strategy=kp_strategy)

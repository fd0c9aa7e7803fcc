import io

from battlesim.core.logging import Logger
from battlesim.core.types import strip_ansi as strip_colors


def test_threshold_filters_and_formats_extras():
    buf = io.StringIO()
    log = Logger("INFO", stream=buf)
    log.debug("Hidden")
    log.info("TurnResolved", damage=18, crit=False)
    out = strip_colors(buf.getvalue())
    assert "Hidden" not in out
    assert "[INFO] TurnResolved damage=18 crit=False" in out


def test_set_level():
    buf = io.StringIO()
    log = Logger("ERROR", stream=buf)
    log.warn("Quiet")
    log.set_level("DEBUG")
    log.debug("Loud")
    assert "Quiet" not in buf.getvalue()
    assert "Loud" in buf.getvalue()

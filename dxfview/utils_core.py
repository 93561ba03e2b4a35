# Configuration helpers, metadata and paths
#
# Qt code imports this directly (``import dxfview.utils_core as Utils``).
# The configuration is a module-global ConfigParser filled from the
# packaged dxfview.ini (defaults) and the user's ~/.dxfview file.

__all__ = [
    # Metadata
    "__version__", "__prg__", "__title__",
    # Paths
    "prgpath", "iniSystem", "iniUser",
    # Translation
    "_",
    # Globals
    "config", "_maxRecent",
    # Functions
    "loadConfiguration", "saveConfiguration", "cleanConfiguration",
    "addSection",
    "getStr", "getInt", "getFloat", "getBool",
    "setBool", "setStr", "setInt", "setFloat",
    "addRecent", "getRecent",
]

import configparser
import gettext
import os
import sys

__version__ = "0.3.0"
__prg__ = "dxfview"

__title__ = "{} {} ({} py{}.{})".format(
    __prg__,
    __version__,
    sys.platform,
    sys.version_info.major,
    sys.version_info.minor,
)

prgpath = os.path.abspath(os.path.dirname(__file__))
iniSystem = os.path.join(prgpath, f"{__prg__}.ini")
iniUser = os.path.expanduser(f"~/.{__prg__}")


_ = gettext.translation(
    __prg__, os.path.join(prgpath, "locales"), fallback=True
).gettext


config = configparser.ConfigParser(interpolation=None)

_maxRecent = 10


# -----------------------------------------------------------------------------
# Load configuration
# -----------------------------------------------------------------------------
def loadConfiguration(systemOnly=False):
    global config
    if systemOnly:
        config.read(iniSystem)
    else:
        config.read([iniSystem, iniUser])


# -----------------------------------------------------------------------------
# Save configuration file
# -----------------------------------------------------------------------------
def saveConfiguration():
    global config
    cleanConfiguration()
    with open(iniUser, "w") as f:
        config.write(f)


# ----------------------------------------------------------------------
# Remove items that are the same as in the default ini
# ----------------------------------------------------------------------
def cleanConfiguration():
    global config
    newconfig = config
    config = configparser.ConfigParser(interpolation=None)

    loadConfiguration(True)

    for section in config.sections():
        for item, value in config.items(section):
            try:
                new = newconfig.get(section, item)
                if value == new:
                    newconfig.remove_option(section, item)
            except (configparser.NoOptionError, configparser.NoSectionError):
                pass
    config = newconfig


# -----------------------------------------------------------------------------
def addSection(section):
    if not config.has_section(section):
        config.add_section(section)


# -----------------------------------------------------------------------------
def getStr(section, name, default=""):
    try:
        return config.get(section, name)
    except (configparser.Error, ValueError):
        return default


# -----------------------------------------------------------------------------
def getInt(section, name, default=0):
    try:
        return int(config.get(section, name))
    except (configparser.Error, ValueError):
        return default


# -----------------------------------------------------------------------------
def getFloat(section, name, default=0.0):
    try:
        return float(config.get(section, name))
    except (configparser.Error, ValueError):
        return default


# -----------------------------------------------------------------------------
def getBool(section, name, default=False):
    try:
        return bool(int(config.get(section, name)))
    except (configparser.Error, ValueError):
        return default


# -----------------------------------------------------------------------------
def setBool(section, name, value):
    addSection(section)
    config.set(section, name, str(int(value)))


# -----------------------------------------------------------------------------
def setStr(section, name, value):
    addSection(section)
    config.set(section, name, str(value))


setInt = setStr
setFloat = setStr


# -----------------------------------------------------------------------------
# Recent files, most recent first as File/recent.0 .. recent.N
# -----------------------------------------------------------------------------
def addRecent(filename):
    sfn = os.path.abspath(filename)
    addSection("File")

    last = _maxRecent - 2
    for i in range(_maxRecent):
        rfn = getRecent(i)
        if rfn is None:
            last = i - 1
            break
        if rfn == sfn:
            if i == 0:
                return
            last = i - 1
            break

    # Shift everything by one
    for i in range(last, -1, -1):
        config.set("File", f"recent.{i + 1}", getRecent(i))
    config.set("File", "recent.0", sfn)


# -----------------------------------------------------------------------------
def getRecent(recent):
    try:
        return config.get("File", f"recent.{int(recent)}")
    except (configparser.NoOptionError, configparser.NoSectionError):
        return None

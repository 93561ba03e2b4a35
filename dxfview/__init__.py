# dxfview - ASCII DXF / SVG viewer core and Qt front end

from dxfview.DxfParser import parse_dxf  # noqa: F401
from dxfview.utils_core import __version__  # noqa: F401

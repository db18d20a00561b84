import pytest

from ipfixoptsd_app.template_cache import LRUTemplateCache

# One options template set: template 512, 11 fields, 1 scope field.
TEMPLATE_BYTES = bytes( [ 0, 10, 0, 72, 90, 62, 128, 116, 0, 1, 119, 149,
    0, 8, 0, 0, 0, 3, 0, 56, 2, 0, 0, 11, 0, 1, 0, 144, 0, 4, 0, 41, 0, 8,
    0, 42, 0, 8, 0, 160, 0, 8, 0, 130, 0, 4, 0, 131, 0, 16, 0, 34, 0, 4,
    0, 36, 0, 2, 0, 37, 0, 2, 0, 214, 0, 1, 0, 215, 0, 1, 0, 0 ] )

# One options data set for template 512.
DATA_BYTES = bytes( [ 0, 10, 0, 80, 90, 62, 128, 116, 0, 1, 119, 149,
    0, 8, 0, 0, 2, 0, 0, 64, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 250, 0, 0,
    0, 0, 0, 0, 0, 10, 0, 0, 0, 0, 0, 0, 0, 72, 192, 168, 0, 1, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 10, 0, 60, 0, 15, 10,
    17, 0, 0 ] )

@pytest.fixture
def templates():
    return( LRUTemplateCache( 10240 ) )

@pytest.fixture
def template_bytes():
    return( TEMPLATE_BYTES )

@pytest.fixture
def data_bytes():
    return( DATA_BYTES )

import queue

import send
from ipfixoptsd_app.packet import Packet
from ipfixoptsd_app.errors import TooShort
from ipfixoptsd_app.template_cache import LRUTemplateCache

class FakeSocket( object ):

    name = 'fake socket'

    def __init__( self ):
        self._queue = queue.Queue()

    def queue( self ):
        return( self._queue )

def item( buff, address=( '192.0.2.1', 4739 ) ):
    return( [ address, 4739, buff, len( buff ) ] )

def test_process( template_bytes, data_bytes ):
    p = Packet( FakeSocket(), LRUTemplateCache( 4 ) )

    assert p.process( item( data_bytes ) ).options == {}
    assert p.process( item( template_bytes ) ).options is None
    assert p.process( item( data_bytes ) ).options[ 'flowIdleTimeout' ] == 15
    assert isinstance( p.process( item( b'' ) ).error, TooShort )

    assert p.metric_messages == 4
    assert p.metric_templates == 1
    assert p.metric_options == 1
    assert p.metric_unknown_template == 1
    assert p.metric_errors == 1

def test_buffer_longer_than_packet( template_bytes ):
    templates = LRUTemplateCache( 4 )
    p = Packet( FakeSocket(), templates )

    buff = bytearray( 4096 )
    buff[ :len( template_bytes ) ] = template_bytes
    result = p.process( [ ( '192.0.2.1', 4739 ), 4739, buff,
        len( template_bytes ) ] )

    assert result.ok
    ( template, found ) = templates.get( 512 )
    assert len( template.fields ) == 10

def test_process_loop_stops():
    src = FakeSocket()
    templates = LRUTemplateCache( 4 )
    p = Packet( src, templates )

    src.queue().put( item( send.make_message( 3, send.make_template_body(
        send.TEMPLATE_ID, send.template_fields ) ) ) )
    src.queue().put( item( b'' ) )
    p.stop()
    p.process_loop()

    assert send.TEMPLATE_ID in templates
    assert p.metric_messages == 1

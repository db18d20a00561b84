"""
Message dispatch.  parse_payload() takes one complete IPFIX message,
reads the preamble and hands the set body to the options template
decoder or the options data decoder.

The message is assumed to hold one set, and for data sets the set id
is taken to be the template id for the whole body.  Messages carrying
several sets, or several records per set, are only decoded up to the
first record.

Nothing raised while decoding escapes parse_payload().  Failures come
back in the DecodeResult.
"""

from collections import namedtuple

import ipfixoptsd_app.header
from ipfixoptsd_app.netflow_v10 import (NETFLOW_V10_VERSION,
    OPTIONS_TEMPLATE_SET_ID, MIN_DATA_SET_ID)
from ipfixoptsd_app.errors import (DecodeError, UnsupportedVersion,
    EmptyPayload, UnsupportedSetType, UnknownTemplate)
from ipfixoptsd_app.template import parse_options_template
from ipfixoptsd_app.options import Options, decode_options_values
from ipfixoptsd_app.ipfixoptsd_log import log

class DecodeResult( namedtuple( 'DecodeResult', 'header options error' ) ):

    """
    header: The MessageHeader, or None if the preamble was unreadable.
    options: Options for a data set, None for a template set or a
        failure.
    error: None, or the DecodeError that stopped decoding.
    """

    __slots__ = ()

    @property
    def ok( self ):
        return( self.error is None or not self.error.fatal )

def _parse( buff, templates, registry, exporter, header ):

    if header.version != NETFLOW_V10_VERSION:
        raise UnsupportedVersion( header.version )

    offset = ipfixoptsd_app.header.v10_header_len()
    if len( buff ) <= offset:
        raise EmptyPayload( 'no set body after the preamble' )

    set_id = header.set_id

    if set_id == OPTIONS_TEMPLATE_SET_ID:
        parse_options_template( buff, offset, templates, exporter,
            header.domain_id )
        return( None )

    if set_id >= MIN_DATA_SET_ID:
        key = templates.key( exporter, header.domain_id, set_id )
        ( template, found ) = templates.get( key )
        if not found:
            raise UnknownTemplate( set_id )
        return( decode_options_values( template, buff, offset, registry ) )

    raise UnsupportedSetType( set_id )

def parse_payload( buff, templates, registry=None, exporter=None ):

    """
    Decodes one message.

    Args:
        buff: A bytes like object holding exactly one message.
        templates: The TemplateStore to read and write.  It is passed
            in so one store can be shared between threads, or kept
            separate for testing.
        registry: ( en, id ) -> IPFixRule dict.  Defaults to
            ipfix.ipfix_registry.
        exporter: Identifies the sender.  Only used by stores that key
            on it.

    Returns:
        A DecodeResult.  Template sets give options None; data sets
        for an unknown template give empty options and a non-fatal
        UnknownTemplate error.
    """

    header = None
    try:
        header = ipfixoptsd_app.header.v10_header( buff )

        log().debug( 'DEBUG: header version=%d, length=%d, '
            'export time=%d, sequence=%d, domain=%d, set id=%d' % header )
        if header.message_length > len( buff ):
            log().debug( 'DEBUG: declared length %d longer than '
                'buffer %d' % ( header.message_length, len( buff ) ) )

        options = _parse( buff, templates, registry, exporter, header )
    except UnknownTemplate as e:
        return( DecodeResult( header, Options(), e ) )
    except DecodeError as e:
        return( DecodeResult( header, None, e ) )

    return( DecodeResult( header, options, None ) )

# End.

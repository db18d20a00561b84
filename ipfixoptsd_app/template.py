"""
Options template records.

An options template record is a small header (template id, field
count, scope field count) followed by field descriptors.  A descriptor
is 4 bytes, element id and length, unless the high bit of the element
id is set.  Then the element belongs to an enterprise and a 4 byte
enterprise number follows, for 8 bytes total.

Scope descriptors come first, then the regular descriptors.  Order
matters: data records are walked by position, not by name.
"""

from collections import namedtuple

import ipfixoptsd_app.netflow_v10
import ipfixoptsd_app.util
from ipfixoptsd_app.netflow_v10 import ENTERPRISE_BIT, ELEMENT_ID_MASK
from ipfixoptsd_app.errors import InsufficientData
from ipfixoptsd_app.ipfixoptsd_log import log

TemplateField = namedtuple( 'TemplateField',
    'element_id length enterprise_number' )

OptionsTemplate = namedtuple( 'OptionsTemplate',
    'template_id field_count scope_field_count scope_fields fields' )

(netflow_v10_options_template_header_struct,
    netflow_v10_options_template_header_keys) = (
        ipfixoptsd_app.util.make_pack_items(
            ipfixoptsd_app.netflow_v10.netflow_v10_options_template_header_list ))

_ot_header_id = netflow_v10_options_template_header_keys[ 'template_id' ]
_ot_header_fcnt = netflow_v10_options_template_header_keys[ 'field_cnt' ]
_ot_header_sfcnt = (
    netflow_v10_options_template_header_keys[ 'scope_field_cnt' ] )

(netflow_v10_field_struct, netflow_v10_field_keys) = (
    ipfixoptsd_app.util.make_pack_items(
        ipfixoptsd_app.netflow_v10.netflow_v10_field_list ))

_field_id = netflow_v10_field_keys[ 'element_id' ]
_field_len = netflow_v10_field_keys[ 'len' ]

(netflow_v10_enterprise_struct, _) = (
    ipfixoptsd_app.util.make_pack_items(
        ipfixoptsd_app.netflow_v10.netflow_v10_enterprise_list ))

def decode_template_field( buff, offset=0 ):

    """
    Decodes one field descriptor.

    Args:
        buff: Buffer holding the descriptor.
        offset: Offset of the descriptor in buff.

    Returns:
        A tuple of the TemplateField and the number of bytes it used,
        4 or 8.  The enterprise bit is always cleared from element_id.

    Raises:
        InsufficientData: The descriptor runs past the end of buff.
            Nothing past the end of buff is read.
    """

    flen = netflow_v10_field_struct.size
    if offset + flen > len( buff ):
        raise InsufficientData( 'field descriptor at %d needs %d bytes, '
            '%d left' % ( offset, flen, len( buff ) - offset ) )

    field = netflow_v10_field_struct.unpack_from( buff, offset )
    element_id = field[ _field_id ]

    if not element_id & ENTERPRISE_BIT:
        return( TemplateField( element_id, field[ _field_len ], 0 ), flen )

    elen = flen + netflow_v10_enterprise_struct.size
    if offset + elen > len( buff ):
        raise InsufficientData( 'enterprise field descriptor at %d needs '
            '%d bytes, %d left' % ( offset, elen, len( buff ) - offset ) )

    ( en, ) = netflow_v10_enterprise_struct.unpack_from( buff, offset + flen )

    return( TemplateField( element_id & ELEMENT_ID_MASK,
        field[ _field_len ], en ), elen )

def _decode_fields( buff, offset, cnt, fields ):

    """
    Appends up to cnt descriptors to fields.  Stops quietly when the
    buffer runs out.

    Returns:
        A tuple of the new offset and True if all cnt were decoded.
    """

    for i in range( cnt ):
        try:
            ( tf, used ) = decode_template_field( buff, offset )
        except InsufficientData as e:
            log().debug( 'DEBUG: template truncated: %s' % e )
            return( offset, False )
        fields.append( tf )
        offset += used

    return( offset, True )

def parse_options_template( buff, offset, templates, exporter=None,
        domain_id=0 ):

    """
    Decodes an options template record and stores it.

    A record that ends early is not an error.  Whatever descriptors
    were complete are kept and the partial template is stored.

    Args:
        buff: The raw message buffer.
        offset: Offset to the start of the template record.
        templates: A TemplateStore that receives the template.
        exporter: Identifies the sender, for stores that key on it.
        domain_id: Observation domain id from the message header.

    Returns:
        The OptionsTemplate that was stored.

    Raises:
        InsufficientData: The options template header does not fit.
    """

    hlen = netflow_v10_options_template_header_struct.size
    if offset + hlen > len( buff ):
        raise InsufficientData( 'options template header needs %d bytes, '
            '%d left' % ( hlen, len( buff ) - offset ) )

    h = netflow_v10_options_template_header_struct.unpack_from( buff, offset )
    template_id = h[ _ot_header_id ]
    cnt = h[ _ot_header_fcnt ]
    scnt = h[ _ot_header_sfcnt ]
    offset += hlen

    log().debug( 'DEBUG: options template id=%d, field cnt=%d, '
        'scope field cnt=%d' % ( template_id, cnt, scnt ) )

    scope_fields = []
    fields = []

    ( offset, complete ) = _decode_fields( buff, offset, scnt, scope_fields )
    if complete:
        _decode_fields( buff, offset, max( 0, cnt - scnt ), fields )

    template = OptionsTemplate( template_id, cnt, scnt,
        tuple( scope_fields ), tuple( fields ) )

    for (i, tf) in enumerate( template.scope_fields + template.fields ):
        if i < len( template.scope_fields ):
            scope = 'SCOPE: '
        else:
            scope = ''
        log().debug( 'DEBUG:     %sfield=%d, len=%d, en=%d' %
            ( scope, tf.element_id, tf.length, tf.enterprise_number ) )

    templates.put( templates.key( exporter, domain_id, template_id ),
        template )

    return( template )

# End.

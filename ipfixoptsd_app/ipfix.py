"""
This module defines the options fields this daemon knows how to
decode.  Identifiers, names and types come from the IANA registry:

    http://www.iana.org/assignments/ipfix/ipfix.xhtml

Only enterprise 0, the IANA space, is populated.  Any field that is
not in the registry is skipped by its declared length.

ipfix_id_to_info: fields:
        name    - The output name of the field
        kind    - A ValueKind, which says how the bytes are decoded
        id      - The element id
        en      - The enterprise number

make_registry() builds a dict, indexed by ( en, id ), whose value is
an IPFixRule.  The dict should be viewed as constant once built.
"""

import enum
import struct
import ipaddress
from collections import namedtuple

class ValueKind( enum.Enum ):

    """
    The type of a decoded value.  The value of each member is a tuple
    of the natural width in bytes and the struct format character.
    Addresses have no format character.
    """

    U8 = ( 1, 'B' )
    U16 = ( 2, 'H' )
    U32 = ( 4, 'L' )
    U64 = ( 8, 'Q' )
    I64 = ( 8, 'q' )
    IPV4 = ( 4, None )
    IPV6 = ( 16, None )

    @property
    def width( self ):
        return( self.value[ 0 ] )

    @property
    def fmt( self ):
        return( self.value[ 1 ] )

_structs = { k: struct.Struct( '!' + k.fmt ) for k in ValueKind if k.fmt }

class IPFixRule( namedtuple( 'IPFixRule', 'name kind id en' ) ):

    __slots__ = ()

    def decode( self, data ):

        """
        Decodes data, the declared bytes of one field instance.

        Integers: if there are at least as many bytes as the natural
        width, the first natural width bytes are used.  If there are
        fewer (reduced size encoding, RFC 7011 section 6.2), all of
        them are used.  Single byte kinds only ever look at the first
        byte, no matter the declared length.

        Addresses must be exactly 4 or 16 bytes.

        Returns:
            The decoded value, or None if the bytes can't be decoded.
        """

        kind = self.kind
        n = len( data )

        if kind is ValueKind.IPV4:
            if n != kind.width:
                return( None )
            return( ipaddress.IPv4Address( bytes( data ) ) )
        if kind is ValueKind.IPV6:
            if n != kind.width:
                return( None )
            return( ipaddress.IPv6Address( bytes( data ) ) )

        if n == 0:
            return( None )
        if n >= kind.width:
            return( _structs[ kind ].unpack_from( data )[ 0 ] )

        return( int.from_bytes( data, 'big',
            signed=( kind is ValueKind.I64 ) ) )

ipfix_id_to_info = [
    ( 'samplingInterval', ValueKind.U32, 34 ),
    ( 'flowActiveTimeout', ValueKind.U16, 36 ),
    ( 'flowIdleTimeout', ValueKind.U16, 37 ),
    ( 'exportedMessageTotalCount', ValueKind.U64, 41 ),
    ( 'exportedFlowRecordTotalCount', ValueKind.U64, 42 ),
    ( 'exporterIPv4Address', ValueKind.IPV4, 130 ),
    ( 'exporterIPv6Address', ValueKind.IPV6, 131 ),
    ( 'exportingProcessId', ValueKind.U32, 144 ),
    ( 'systemInitTimeMilliseconds', ValueKind.I64, 160 ),
    ( 'exportProtocolVersion', ValueKind.U8, 214 ),
    ( 'exportTransportProtocol', ValueKind.U8, 215 ),
]

ipfix_id_to_info = [ IPFixRule( name, kind, id, 0 )
                        for ( name, kind, id ) in ipfix_id_to_info ]

#
# Older collectors wrote systemInitTimeMilliseconds (160) under the
# exportingProcessId name, so a template carrying both reports only
# one of them.  That is kept as the default so output does not change
# under existing consumers.
#

_legacy_names = { 160: 'exportingProcessId' }

def make_registry( legacy_system_init_time=True ):

    """
    Builds the ( enterprise number, element id ) -> IPFixRule dict.

    Args:
        legacy_system_init_time: If True, element 160 is reported
            as exportingProcessId.  If False, it is reported as
            systemInitTimeMilliseconds.

    Returns:
        A dict.
    """

    registry = {}
    for rule in ipfix_id_to_info:
        if legacy_system_init_time and rule.id in _legacy_names:
            rule = rule._replace( name=_legacy_names[ rule.id ] )
        registry[ ( rule.en, rule.id ) ] = rule

    return( registry )

ipfix_registry = make_registry()

# End.

"""
Decodes the IPFIX message preamble: the 16 byte message header and
the 4 byte set header that follows it.  Only the set id is kept from
the set header.  The whole message is assumed to hold a single set.
"""

from collections import namedtuple

import ipfixoptsd_app.netflow_v10
import ipfixoptsd_app.util
from ipfixoptsd_app.errors import TooShort

MessageHeader = namedtuple( 'MessageHeader',
    'version message_length export_time sequence_number domain_id set_id' )

(netflow_v10_header_struct, netflow_v10_header_keys) = (
    ipfixoptsd_app.util.make_pack_items(
        ipfixoptsd_app.netflow_v10.netflow_v10_header_list ))

_reported = [ netflow_v10_header_keys[ k ] for k in MessageHeader._fields ]

def v10_header_len():

    """
    Returns the number of bytes in the preamble.
    """

    return( netflow_v10_header_struct.size )

def v10_header( buff ):

    """
    Unpacks the preamble at the start of buff.

    Args:
        buff: A bytes like object holding one complete message.

    Returns:
        A MessageHeader.

    Raises:
        TooShort: buff can not hold the preamble.
    """

    if len( buff ) < netflow_v10_header_struct.size:
        raise TooShort( 'message is %d bytes, need at least %d' %
            ( len( buff ), netflow_v10_header_struct.size ) )

    h = netflow_v10_header_struct.unpack_from( buff )

    return( MessageHeader._make( [ h[ i ] for i in _reported ] ) )

# End.

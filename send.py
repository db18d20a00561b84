"""
Test sender.  Sends an options template and then options data for it
to a running ipfixoptsd, once a second, so the decoded options show up
in its log.

    python send.py [--host 127.0.0.1] [--port 4739] [--count N]
"""

import time
import socket
import struct
import argparse

import ipfixoptsd_app.header
import ipfixoptsd_app.template
from ipfixoptsd_app.netflow_v10 import (NETFLOW_V10_VERSION,
    OPTIONS_TEMPLATE_SET_ID, ENTERPRISE_BIT)

header_struct = ipfixoptsd_app.header.netflow_v10_header_struct
ot_header_struct = (
    ipfixoptsd_app.template.netflow_v10_options_template_header_struct )
field_struct = ipfixoptsd_app.template.netflow_v10_field_struct
enterprise_struct = ipfixoptsd_app.template.netflow_v10_enterprise_struct

TEMPLATE_ID = 512
DOMAIN_ID = 8

#
# ( element id, length, enterprise number ), scope field first.  The
# enterprise field is there to show it being skipped.
#

template_fields = [
    ( 144, 4, 0 ),                  # exportingProcessId (scope)
    ( 41, 8, 0 ),                   # exportedMessageTotalCount
    ( 42, 8, 0 ),                   # exportedFlowRecordTotalCount
    ( 1, 4, 9 ),                    # enterprise 9, unknown to us
    ( 130, 4, 0 ),                  # exporterIPv4Address
    ( 34, 4, 0 ),                   # samplingInterval
    ( 36, 2, 0 ),                   # flowActiveTimeout
    ( 37, 2, 0 ),                   # flowIdleTimeout
    ( 214, 1, 0 ),                  # exportProtocolVersion
    ( 215, 1, 0 ),                  # exportTransportProtocol
]

def make_message( set_id, body, sequence_number=0, domain_id=DOMAIN_ID,
        export_time=None ):

    """
    Wraps body in a message header and set header.
    """

    if export_time is None:
        export_time = int( time.time() )

    length = header_struct.size + len( body )
    return( header_struct.pack( NETFLOW_V10_VERSION, length, export_time,
        sequence_number, domain_id, set_id, length - 16 ) + body )

def make_template_body( template_id, fields, scope_field_cnt=1 ):

    """
    Builds an options template record from ( id, length, en ) tuples.
    """

    body = ot_header_struct.pack( template_id, len( fields ),
        scope_field_cnt )
    for ( element_id, length, en ) in fields:
        if en:
            body += field_struct.pack( element_id | ENTERPRISE_BIT, length )
            body += enterprise_struct.pack( en )
        else:
            body += field_struct.pack( element_id, length )

    return( body )

def make_data_body( process_id, message_cnt, flow_cnt, address ):
    return( struct.pack( '!LQQL4sLHHBB', process_id, message_cnt, flow_cnt,
        0xdeadbeef, socket.inet_aton( address ), 10, 60, 15, 10, 17 ) )

def parse_args():

    p = argparse.ArgumentParser( description =
        'Sends IPFIX options to ipfixoptsd.' )
    p.add_argument( '--host', default='127.0.0.1' )
    p.add_argument( '--port', type=int, default=4739 )
    p.add_argument( '--count', type=int, default=0,
        help='Messages pairs to send, 0 for no limit.' )

    return( p.parse_args() )

def main():

    cmdparse = parse_args()

    s = socket.socket( socket.AF_INET, socket.SOCK_DGRAM )
    s.connect( ( cmdparse.host, cmdparse.port ) )

    sequence_number = 0
    sent = 0

    while not cmdparse.count or sent < cmdparse.count:
        s.send( make_message( OPTIONS_TEMPLATE_SET_ID,
            make_template_body( TEMPLATE_ID, template_fields ),
            sequence_number ) )
        s.send( make_message( TEMPLATE_ID,
            make_data_body( 2, sequence_number, 10 * sequence_number,
                '192.168.0.1' ),
            sequence_number ) )

        sequence_number += 1
        sent += 1

        if (sent % 100) == 0:
            print( '%d option messages' % sent )

        time.sleep( 1 )

if __name__ == '__main__':
    main()

# End.

"""
https://tools.ietf.org/html/rfc7011

Wire layouts for the parts of an IPFIX message this daemon reads.
Each list is [ name, byte width ] in wire order and is turned into a
struct.Struct by util.make_pack_items.  Names starting with xx_ are
read but not reported.
"""

#
# The message header and the first set header are read together as a
# single 20 byte preamble.  Only the set id is used from the set header;
# the set length is skipped.
#

netflow_v10_header_list = [
    [ 'version', 2 ],
    [ 'message_length', 2 ],
    [ 'export_time', 4 ],               # Secs since 0000 UTC 1970
    [ 'sequence_number', 4 ],
    [ 'domain_id', 4 ],
    [ 'set_id', 2 ],
    [ 'xx_set_len', 2 ]
]

netflow_v10_options_template_header_list = [
    [ 'template_id', 2 ],
    [ 'field_cnt', 2 ],
    [ 'scope_field_cnt', 2 ]
]

netflow_v10_field_list = [
    [ 'element_id', 2 ],
    [ 'len', 2 ]
]

netflow_v10_enterprise_list = [
    [ 'enterprise_number', 4 ]
]

NETFLOW_V10_VERSION = 10
OPTIONS_TEMPLATE_SET_ID = 3
MIN_DATA_SET_ID = 256

ENTERPRISE_BIT = 0x8000
ELEMENT_ID_MASK = 0x7fff

# End.

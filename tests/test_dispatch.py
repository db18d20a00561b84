import struct
import ipaddress

import send
from ipfixoptsd_app.dispatch import parse_payload
from ipfixoptsd_app.errors import (InsufficientData, TooShort,
    UnsupportedVersion, EmptyPayload, UnsupportedSetType, UnknownTemplate)
from ipfixoptsd_app.ipfix import ValueKind, make_registry
from ipfixoptsd_app.template import TemplateField
from ipfixoptsd_app.template_cache import LRUTemplateCache, ScopedTemplateCache

def test_empty_buffer( templates ):
    result = parse_payload( b'', templates )
    assert not result.ok
    assert isinstance( result.error, TooShort )
    assert isinstance( result.error, InsufficientData )
    assert result.header is None

def test_short_buffer( templates, template_bytes ):
    result = parse_payload( template_bytes[ :19 ], templates )
    assert isinstance( result.error, TooShort )

def test_wrong_version( templates, template_bytes ):
    result = parse_payload( b'\x00\x09' + template_bytes[ 2: ], templates )
    assert not result.ok
    assert isinstance( result.error, UnsupportedVersion )
    assert result.error.version == 9

def test_preamble_only( templates, template_bytes ):
    result = parse_payload( template_bytes[ :20 ], templates )
    assert not result.ok
    assert isinstance( result.error, EmptyPayload )
    assert result.header.set_id == 3

def test_unsupported_set( templates ):
    buff = send.make_message( 2, b'\x01\x00\x00\x01\x00\x08\x00\x04' )
    result = parse_payload( buff, templates )
    assert not result.ok
    assert isinstance( result.error, UnsupportedSetType )
    assert result.error.set_id == 2

def test_short_template_set( templates ):
    result = parse_payload( send.make_message( 3, b'\x02\x00' ), templates )
    assert not result.ok
    assert isinstance( result.error, InsufficientData )

def test_template( templates, template_bytes ):
    result = parse_payload( template_bytes, templates )
    assert result.ok
    assert result.error is None
    assert result.options is None
    assert result.header.version == 10
    assert result.header.message_length == 72
    assert result.header.sequence_number == 96149
    assert result.header.domain_id == 0x80000
    assert result.header.set_id == 3
    assert 512 in templates

def test_data_before_template( templates, data_bytes ):
    result = parse_payload( data_bytes, templates )
    assert result.ok
    assert len( result.options ) == 0
    assert isinstance( result.error, UnknownTemplate )
    assert result.error.template_id == 512

def test_complete_options( templates, template_bytes, data_bytes ):
    assert parse_payload( template_bytes, templates ).ok
    result = parse_payload( data_bytes, templates )

    assert result.ok
    assert result.error is None
    o = result.options
    assert o[ 'samplingInterval' ] == 10
    assert o[ 'exporterIPv4Address' ] == ipaddress.IPv4Address( '192.168.0.1' )
    assert str( o[ 'exporterIPv6Address' ] ) == '::'
    assert o[ 'exportTransportProtocol' ] == 17
    assert o[ 'exportProtocolVersion' ] == 10
    assert o[ 'exportingProcessId' ] == 72
    assert o.kind( 'exportingProcessId' ) is ValueKind.I64
    assert o[ 'flowActiveTimeout' ] == 60
    assert o[ 'flowIdleTimeout' ] == 15
    assert o[ 'exportedFlowRecordTotalCount' ] == 10
    assert o[ 'exportedMessageTotalCount' ] == 250

def test_fixed_registry( templates, template_bytes, data_bytes ):
    registry = make_registry( legacy_system_init_time=False )
    parse_payload( template_bytes, templates, registry )
    o = parse_payload( data_bytes, templates, registry ).options

    assert o[ 'exportingProcessId' ] == 2
    assert o.kind( 'exportingProcessId' ) is ValueKind.U32
    assert o[ 'systemInitTimeMilliseconds' ] == 72

def test_truncated_data( templates, template_bytes, data_bytes ):
    parse_payload( template_bytes, templates )
    result = parse_payload( data_bytes[ :20 + 4 + 8 + 3 ], templates )

    assert result.ok
    assert dict( result.options ) == { 'exportingProcessId': 2,
        'exportedMessageTotalCount': 250 }

def test_template_round_trip():
    fields = [ ( 144, 4, 0 ), ( 7, 2, 6871 ), ( 34, 4, 0 ), ( 36, 2, 0 ) ]
    templates = LRUTemplateCache( 4 )

    result = parse_payload( send.make_message( 3,
        send.make_template_body( 777, fields, 2 ) ), templates )
    assert result.ok

    ( template, found ) = templates.get( 777 )
    assert found
    assert template.field_count == 4
    assert template.scope_field_count == 2
    assert template.scope_fields + template.fields == tuple(
        TemplateField( *f ) for f in fields )

def test_sender_messages():
    templates = LRUTemplateCache( 4 )
    parse_payload( send.make_message( 3, send.make_template_body(
        send.TEMPLATE_ID, send.template_fields ) ), templates )
    result = parse_payload( send.make_message( send.TEMPLATE_ID,
        send.make_data_body( 2, 5, 50, '10.1.2.3' ) ), templates )

    assert result.ok
    assert dict( result.options ) == {
        'exportingProcessId': 2,
        'exportedMessageTotalCount': 5,
        'exportedFlowRecordTotalCount': 50,
        'exporterIPv4Address': ipaddress.IPv4Address( '10.1.2.3' ),
        'samplingInterval': 10,
        'flowActiveTimeout': 60,
        'flowIdleTimeout': 15,
        'exportProtocolVersion': 10,
        'exportTransportProtocol': 17 }

def test_scoped_templates( template_bytes, data_bytes ):
    templates = ScopedTemplateCache( 16 )
    a = ( '192.0.2.1', 4739 )
    b = ( '192.0.2.2', 4739 )

    assert parse_payload( template_bytes, templates, exporter=a ).ok
    assert ( a, 0x80000, 512 ) in templates
    assert len( templates ) == 1

    result = parse_payload( data_bytes, templates, exporter=b )
    assert isinstance( result.error, UnknownTemplate )

    result = parse_payload( data_bytes, templates, exporter=a )
    assert result.options[ 'samplingInterval' ] == 10

def test_shared_template_id_without_scope( template_bytes, data_bytes ):
    templates = LRUTemplateCache( 16 )
    parse_payload( template_bytes, templates, exporter=( '192.0.2.1', 1 ) )
    result = parse_payload( data_bytes, templates,
        exporter=( '192.0.2.2', 1 ) )
    assert result.options[ 'samplingInterval' ] == 10

def test_declared_length_ignored( templates, template_bytes ):
    buff = template_bytes[ :2 ] + struct.pack( '!H', 9999 ) + (
        template_bytes[ 4: ] )
    assert parse_payload( buff, templates ).ok

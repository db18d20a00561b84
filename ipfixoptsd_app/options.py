"""
Options data records.

An options data record is a flat run of field values.  Widths and
order come from the options template the record was sent against,
scope fields first.  Values are found by walking the template, so the
cursor has to move by each field's declared length whether or not we
know what the field is.  Skipping one unknown field by the wrong
amount would misplace every field after it.
"""

from collections.abc import Mapping

from ipfixoptsd_app.ipfix import ipfix_registry
from ipfixoptsd_app.ipfixoptsd_log import log

class Options( Mapping ):

    """
    Read only mapping of output name to decoded value.  The values are
    ints or ipaddress objects; kind( name ) gives the ValueKind tag for
    an entry so a caller can tell a u16 from a u64.
    """

    __slots__ = ( '_values', '_kinds' )

    def __init__( self, values=None, kinds=None ):
        self._values = dict( values or {} )
        self._kinds = dict( kinds or {} )

    def __getitem__( self, name ):
        return( self._values[ name ] )

    def __iter__( self ):
        return( iter( self._values ) )

    def __len__( self ):
        return( len( self._values ) )

    def kind( self, name ):

        """
        Returns the ValueKind of the entry.  Raises KeyError if there
        is no such entry.
        """

        return( self._kinds[ name ] )

    def __repr__( self ):
        return( 'Options(%r)' % self._values )

def decode_options_values( template, buff, offset=0, registry=None ):

    """
    Decodes one options data record.

    If the buffer runs out before a field's declared length, decoding
    stops and whatever was decoded so far is returned.

    Args:
        template: The OptionsTemplate the record was sent against.
        buff: Buffer holding the record.
        offset: Offset of the record in buff.
        registry: ( en, id ) -> IPFixRule dict.  Defaults to
            ipfix.ipfix_registry.

    Returns:
        An Options object.
    """

    if registry is None:
        registry = ipfix_registry

    values = {}
    kinds = {}
    view = memoryview( buff )
    end = len( buff )

    for field in template.scope_fields + template.fields:
        if offset + field.length > end:
            log().debug( 'DEBUG: options data for template %d truncated '
                'at offset %d' % ( template.template_id, offset ) )
            break

        data = view[ offset:offset + field.length ]
        offset += field.length                      # Known or not

        try:
            rule = registry[ ( field.enterprise_number, field.element_id ) ]
        except KeyError:
            continue

        value = rule.decode( data )
        if value is None:
            log().debug( 'DEBUG: %s: can not decode %d bytes' %
                ( rule.name, field.length ) )
            continue

        values[ rule.name ] = value
        kinds[ rule.name ] = rule.kind

    return( Options( values, kinds ) )

# End.

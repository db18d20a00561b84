import struct

exit_code = 0

def set_exit( code ):

    global exit_code

    if code > exit_code:
        exit_code = code

def get_exit():
    return( exit_code )

def make_pack_items( l, network_byte_order=True ):

    """
    This function is used to make the pack/unpack items for a wire
    layout.  Everything we read is an unsigned integer of 1, 2, 4 or 8
    bytes, or an opaque byte string.

    Args:
        l: The list of fields to convert.  Each element in the list
            is an indexable item, with 0 being the name and 1 having
            the number of bytes in the field.
        network_byte_order: If True, emit a pack string for network
            byte order, else a native unaligned pack string.

    Returns:
        A tuple of:

        0: A class Struct object that can be used to pack or
            unpack objects
        1: A dict of field names to indexes in the Struct pack
           or unpack iterable.
    """

    if network_byte_order:
        pack_string = '!'
    else:
        pack_string = '='

    d = {}
    field_cnt = 0
    for f in l:
        if f[ 0 ] == 'paddingOctets':
            pack_string += 'x' * f[1]
            continue
        elif f[ 1 ] == 1:
            pack_string += 'B'
        elif f[ 1 ] == 2:
            pack_string += 'H'
        elif f[ 1 ] == 4:
            pack_string += 'L'
        elif f[ 1 ] == 8:
            pack_string += 'Q'
        elif f[ 1 ] > 8:
            pack_string += str(f[1]) + 's'
        else:
            raise ValueError( 'Unsupported field width %d for %s' %
                ( f[ 1 ], f[ 0 ] ) )

        d[f[0]]=field_cnt
        field_cnt += 1

    the_struct = struct.Struct( pack_string )

    return( the_struct, d )

# End.

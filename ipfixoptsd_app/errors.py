"""
Decode failures.  The decoders raise these; dispatch.parse_payload
catches them and hands them back to the caller as part of a
DecodeResult, so none of them ever escapes a decode call.

Each class has a 'fatal' attribute.  A non-fatal error still produces
a usable (possibly empty) result.
"""

class DecodeError( ValueError ):

    """
    Base class for everything the decoders can report.
    """

    fatal = True

class InsufficientData( DecodeError ):

    """
    The buffer is shorter than a fixed size structure we must read.
    """

class TooShort( InsufficientData ):

    """
    The buffer can not hold the 20 byte message preamble.
    """

class UnsupportedVersion( DecodeError ):

    def __init__( self, version ):
        self.version = version
        DecodeError.__init__( self,
            'unsupported protocol version %d' % version )

class EmptyPayload( DecodeError ):

    """
    The message holds a preamble and nothing else.
    """

class UnsupportedSetType( DecodeError ):

    def __init__( self, set_id ):
        self.set_id = set_id
        DecodeError.__init__( self, 'unsupported set id %d' % set_id )

class UnknownTemplate( DecodeError ):

    """
    An options data set refers to a template id we have not seen.  The
    data is dropped and an empty result is returned.
    """

    fatal = False

    def __init__( self, template_id ):
        self.template_id = template_id
        DecodeError.__init__( self,
            'template %d not yet defined' % template_id )

# End.

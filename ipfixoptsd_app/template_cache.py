"""
Template storage.

Options data sets only make sense against the options template that
described them, so templates are kept here between messages.  Several
packet threads may share one store, so every operation takes the
store's lock.

A TemplateStore decides two things: how a template is keyed and what
gets thrown away when the store is full.  The decoders only call
key(), put() and get(), so either policy can change without touching
them.
"""

import threading
from collections import OrderedDict

DEFAULT_CAPACITY = 10240

class TemplateStore( object ):

    """
    Interface for template storage.
    """

    def key( self, exporter, domain_id, template_id ):

        """
        Returns the key a template is stored and found under.

        Args:
            exporter: Whatever identifies the sender, usually the
                (address, port) tuple from recvfrom.  May be None.
            domain_id: Observation domain id from the message header.
            template_id: The template id.
        """

        raise NotImplementedError

    def put( self, key, template ):
        raise NotImplementedError

    def get( self, key ):

        """
        Returns a tuple of ( template, found ).  template is None
        when found is False.
        """

        raise NotImplementedError

    def __len__( self ):
        raise NotImplementedError

class LRUTemplateCache( TemplateStore ):

    """
    Fixed capacity store.  get() refreshes an entry; put() of a new key
    into a full cache throws out the least recently used entry.  There
    is no time based expiry.

    Templates are keyed by template id alone.  Two exporters, or two
    observation domains, using the same template id overwrite each
    other.  Use ScopedTemplateCache if that matters.
    """

    def __init__( self, capacity=DEFAULT_CAPACITY ):

        if capacity < 1:
            raise ValueError( 'capacity must be at least 1' )

        self._capacity = capacity
        self._templates = OrderedDict()
        self._lock = threading.Lock()
        self.evictions = 0

    @property
    def capacity( self ):
        return( self._capacity )

    def key( self, exporter, domain_id, template_id ):
        return( template_id )

    def put( self, key, template ):
        with self._lock:
            if key in self._templates:
                self._templates.move_to_end( key )
                self._templates[ key ] = template
                return

            self._templates[ key ] = template
            if len( self._templates ) > self._capacity:
                self._templates.popitem( last=False )
                self.evictions += 1

    def get( self, key ):
        with self._lock:
            try:
                template = self._templates[ key ]
            except KeyError:
                return( None, False )
            self._templates.move_to_end( key )
            return( template, True )

    def __len__( self ):
        with self._lock:
            return( len( self._templates ) )

    def __contains__( self, key ):

        """
        Membership test.  Unlike get(), this does not refresh the entry.
        """

        with self._lock:
            return( key in self._templates )

    def clear( self ):
        with self._lock:
            self._templates.clear()

class ScopedTemplateCache( LRUTemplateCache ):

    """
    Same as LRUTemplateCache, but a template is keyed by the exporter,
    the observation domain and the template id, as RFC 7011 says it
    should be.
    """

    def key( self, exporter, domain_id, template_id ):
        return( ( exporter, domain_id, template_id ) )

# End.

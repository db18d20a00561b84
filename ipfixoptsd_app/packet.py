"""
Packet processing.  A Packet thread takes complete messages off a
Socket's queue, decodes them against the shared template store and
logs the options that come out.
"""

from ipfixoptsd_app.ipfixoptsd_log import log
import ipfixoptsd_app.ipfixoptsd_thread
from ipfixoptsd_app.dispatch import parse_payload
from ipfixoptsd_app.sockets import t_address, t_port, t_p, t_p_len

class Packet( ipfixoptsd_app.ipfixoptsd_thread.IPFixOptsdThread ):

    def __init__( self, src_obj, templates, registry=None,
            socket_thread_name=None ):

        """
        Starts a thread that processes the packets src_obj queues.

        Args:
            src_obj: A Socket, or anything with a queue() method
                returning a queue of [ address, port, buffer, length ].
            templates: The TemplateStore.  All Packet threads in
                the process share one.
            registry: ( en, id ) -> IPFixRule dict, or None for the
                default.
            socket_thread_name: Used to name this thread.
        """

        self._src_obj = src_obj
        self._queue = src_obj.queue()
        self._templates = templates
        self._registry = registry
        self._max_qsize = 0

        self.metric_messages = 0
        self.metric_templates = 0
        self.metric_options = 0
        self.metric_unknown_template = 0
        self.metric_errors = 0

        name = "Packet processor for: %s" % (
            socket_thread_name or getattr( src_obj, 'name', 'unknown' ) )

        ipfixoptsd_app.ipfixoptsd_thread.IPFixOptsdThread.__init__(
            self, name=name, target=self.process_loop )
        self.daemon = True

        log().info( 'INFO: Created thread %s' % self.name )

    def process_loop( self ):

        """
        Processes data on the queue until a zero length packet
        arrives while should_stop is True.
        """

        while True:
            t = self._queue.get( block=True )
            self._max_qsize = max( self._max_qsize, self._queue.qsize() )

            if t[ t_p_len ] == 0 and self.should_stop():
                log().info( 'INFO: Thread %s stopping by request',
                    self.name )
                return

            self.process( t )

    def process( self, t ):

        """
        Decodes one queued item and reports the outcome.

        Args:
            t: [ address, port, buffer, length ].  See the t_*
                constants in sockets.

        Returns:
            The DecodeResult.
        """

        self.metric_messages += 1
        p = t[ t_p ][ :t[ t_p_len ] ]
        result = parse_payload( p, self._templates, self._registry,
            exporter=t[ t_address ] )

        if not result.ok:
            self.metric_errors += 1
            log().info( 'INFO: %s on port %d: dropped %d byte message: %s' %
                ( t[ t_address ], t[ t_port ], t[ t_p_len ], result.error ) )
        elif result.error is not None:
            self.metric_unknown_template += 1
            log().info( 'INFO: %s on port %d: %s' %
                ( t[ t_address ], t[ t_port ], result.error ) )
        elif result.options is None:
            self.metric_templates += 1
            log().info( 'INFO: %s on port %d: options template received, '
                'domain=%d' % ( t[ t_address ], t[ t_port ],
                result.header.domain_id ) )
        else:
            self.metric_options += 1
            log().info( 'INFO: %s on port %d: domain=%d, template=%d, '
                'options: %s' % ( t[ t_address ], t[ t_port ],
                result.header.domain_id, result.header.set_id,
                ', '.join( '%s=%s' % ( k, v )
                    for ( k, v ) in result.options.items() ) ) )

        return( result )

    def print_metrics( self ):
        log().info( 'INFO: %s: messages=%d, templates=%d, options=%d, '
            'unknown template=%d, errors=%d' % ( self.name,
            self.metric_messages, self.metric_templates, self.metric_options,
            self.metric_unknown_template, self.metric_errors ) )

    def qsize( self ):
        m = self._max_qsize
        self._max_qsize = 0
        return( self._queue.qsize(), m )

    def queue( self ):

        """
        Returns the queue associated with the port.
        """

        return( self._queue )

# End.

"""
Socket handling code.  Each port we listen on gets its own thread.
Datagrams are read from the network and put on the thread's queue as
[ address, port, buffer, length ] items.  No decoding happens here.

IPFIX over UDP carries exactly one message per datagram, so every
item on the queue is a complete message.
"""

import queue
import socket

from ipfixoptsd_app.ipfixoptsd_log import log
import ipfixoptsd_app.ipfixoptsd_thread

#
# Indexes into the items placed on the queue.
#

t_address = 0       # Address tuple for sending router
t_port = 1          # Port we are listening on
t_p = 2             # The packet buffer
t_p_len = 3         # The packet length

class Socket( ipfixoptsd_app.ipfixoptsd_thread.IPFixOptsdThread ):

    """
    Handles a UDP socket.  Starts up a thread that listens for
    data on the port.  The queue that data is placed on is
    available via the queue method.

    To get this thread to stop, call stop() and write a 0 length
    packet to the port.
    """

    def __init__( self, port, max_queue_size=50000, buff_size=65535 ):

        """
        Returns a thread object.  Call start on it to cause it
        to listen for packets on the port.

        Args:
            port: The port to listen on.
            max_queue_size: Packets waiting beyond this are dropped.
            buff_size: Largest datagram we accept.
        """

        name = 'Port %d socket reader' % port
        self.port = port
        self._buff_size = buff_size
        self._queue = queue.Queue( maxsize = max_queue_size )
        self._max_qsize = 0
        self.dropped = 0
        self.s = None

        ipfixoptsd_app.ipfixoptsd_thread.IPFixOptsdThread.__init__(
                    self, name=name, target=self.read_loop )
        self.daemon = True
        log().info( 'INFO: Created thread %s' % name )

    def qsize( self ):

        """
        Returns a tuple: the current qsize and the max since the last
        call.
        """

        m = self._max_qsize
        self._max_qsize = 0

        return( self._queue.qsize(), m )

    def qempty( self ):

        """
        Empties the queue immediately.  This is usually done as part of
        a fast shutdown.
        """

        while True:
            try:
                self._queue.get( block=False )
            except queue.Empty:
                break

    def queue( self ):

        """
        Returns the queue associated with the port.
        """

        return( self._queue )

    def _make_socket( self ):

        """
        This method sets up the socket.  Sets the instance attribute 's'.
        """

        self.s = socket.socket( socket.AF_INET, socket.SOCK_DGRAM )
        self.s.setsockopt( socket.SOL_SOCKET, socket.SO_REUSEADDR, 1 )
        self._set_socket_buffer()

        try:
            self.s.bind( ('', self.port) )
        except OSError as e:
            log().error( 'ERROR: bind, errno=%d: %s' % ( e.errno, e.strerror ))
            self.stop()
            self._queue.put( [ ('0.0.0.0', 0), self.port, b'', 0 ] )
            log().info( 'ERROR: Thread %s stopping because of error.',
                self.name )
            raise

    def _set_socket_buffer( self ):

        """
        This routine attempts to maximize the size of the OS buffer
        associated with the socket.
        """

        size = 2<<24            # 16MB

        while size > 2048:
            try:
                self.s.setsockopt( socket.SOL_SOCKET, socket.SO_RCVBUF, size )
                break
            except OSError:
                size //= 2

        if size <= 2048:
            log().error( 'ERROR: Error setting SO_RCVBUF.  Got to 2K.' )
            return

        log().info( 'INFO: Set receive buffer for port %d to %d.' %
                        (self.port, size ) )

    def read_loop( self ):

        """
        Reads datagrams and queues them until a zero length packet
        arrives while should_stop is True.  The zero length item is
        queued too, so the packet thread knows to stop.
        """

        try:
            self._make_socket()
        except OSError:
            return( 0 )

        while True:
            ( buff, address ) = self.s.recvfrom( self._buff_size )
            item = [ address, self.port, buff, len( buff ) ]

            if not buff and self.should_stop():
                self._queue.put( item )
                log().info( 'INFO: Thread %s stopping by request', self.name )
                self.s.close()
                return( 0 )

            try:
                self._queue.put( item, block=False )
            except queue.Full:
                self.dropped += 1
                continue

            self._max_qsize = max( self._max_qsize, self._queue.qsize() )

# End.

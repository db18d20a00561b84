import threading

class IPFixOptsdThread( threading.Thread ):

    """
    Parent class we use in the various threads in this program.
    Primarily contains the code for stopping the thread in a
    graceful manner.

    Generally, to cause a stop, call method stop and put a zero
    length packet on the queue the thread is watching.  It should
    always check should_stop before doing anything with a zero
    length packet.
    """

    def __init__( self, **kwargs ):

        """
        Calls the Thread constructor with any arguments needed
        and creates the stop Event.

        Args:
            Any argument, by keyword, to the threading.Thread class.
        """

        threading.Thread.__init__( self, **kwargs )
        self._stop_event = threading.Event()
        self._know_it_stopped = False

    def should_stop( self ):

        """
        Returns True if the thread should stop.
        """

        return( self._stop_event.is_set() )

    def stop( self ):

        """
        Call when the thread should stop.  The thread will attempt a
        graceful cleanup.  It should actually stop when a 0 length
        queue item is found.
        """

        self._stop_event.set()

    def know_it_stopped( self ):

        """
        Marks the thread as stopped so the caller only reports it once.
        """

        self._know_it_stopped = True

    def do_we_know_it_stopped( self ):
        return( self._know_it_stopped )

# End.

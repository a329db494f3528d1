# MIT License
#
# Copyright (c) 2018-2026 IZE
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import os
import time
import datetime
import threading

from ._version import __version__

from .Digest import Digest
from . import Cryptography

LOG_NONE     = -1
LOG_CRITICAL = 0
LOG_ERROR    = 1
LOG_WARNING  = 2
LOG_NOTICE   = 3
LOG_INFO     = 4
LOG_VERBOSE  = 5
LOG_DEBUG    = 6
LOG_EXTREME  = 7

LOG_STDOUT   = 0x91
LOG_FILE     = 0x92
LOG_CALLBACK = 0x93

LOG_MAXSIZE  = 5*1024*1024

loglevel        = LOG_NOTICE
logfile         = None
logdest         = LOG_STDOUT
logcall         = None
logtimefmt      = "%Y-%m-%d %H:%M:%S"
logtimefmt_p    = "%H:%M:%S.%f"
compact_log_fmt = False

_always_override_destination = False

logging_lock = threading.Lock()

def loglevelname(level):
    if (level == LOG_CRITICAL):
        return "[Critical]"
    if (level == LOG_ERROR):
        return "[Error]   "
    if (level == LOG_WARNING):
        return "[Warning] "
    if (level == LOG_NOTICE):
        return "[Notice]  "
    if (level == LOG_INFO):
        return "[Info]    "
    if (level == LOG_VERBOSE):
        return "[Verbose] "
    if (level == LOG_DEBUG):
        return "[Debug]   "
    if (level == LOG_EXTREME):
        return "[Extra]   "

    return "Unknown"

def version():
    return __version__

def timestamp_str(time_s):
    timestamp = time.localtime(time_s)
    return time.strftime(logtimefmt, timestamp)

def precise_timestamp_str(time_s):
    return datetime.datetime.fromtimestamp(time_s).strftime(logtimefmt_p)[:-3]

def log(msg, level=3, _override_destination = False, pt=False):
    if loglevel == LOG_NONE: return
    global _always_override_destination
    msg = str(msg)
    if loglevel >= level:
        if pt:
            logstring = "["+precise_timestamp_str(time.time())+"] "+loglevelname(level)+" "+msg
        elif not compact_log_fmt:
            logstring = "["+timestamp_str(time.time())+"] "+loglevelname(level)+" "+msg
        else:
            logstring = "["+timestamp_str(time.time())+"] "+msg

        fallback = None
        with logging_lock:
            if (logdest == LOG_STDOUT or _always_override_destination or _override_destination):
                print(logstring)

            elif (logdest == LOG_FILE and logfile != None):
                try:
                    with open(logfile, "a") as file:
                        file.write(logstring+"\n")

                    if os.path.getsize(logfile) > LOG_MAXSIZE:
                        prevfile = logfile+".1"
                        if os.path.isfile(prevfile):
                            os.unlink(prevfile)
                        os.rename(logfile, prevfile)

                except Exception as e:
                    _always_override_destination = True
                    fallback = "Exception occurred while writing log message to log file: "+str(e)

            elif logdest == LOG_CALLBACK:
                try:
                    logcall(logstring)
                except Exception as e:
                    _always_override_destination = True
                    fallback = "Exception occurred while calling external log handler: "+str(e)

        # Logged outside the lock, the lock is not reentrant
        if fallback != None:
            log(fallback, LOG_CRITICAL)
            log("Dumping future log events to console!", LOG_CRITICAL)
            log(msg, level)

def trace_exception(e):
    import traceback
    exception_info = "".join(traceback.TracebackException.from_exception(e).format())
    log(f"An unhandled {str(type(e))} exception occurred: {str(e)}", LOG_ERROR)
    log(exception_info, LOG_ERROR)

def hexrep(data, delimit=True):
    try:
        iter(data)
    except TypeError:
        data = [data]

    delimiter = ":"
    if not delimit:
        delimiter = ""
    hexrep = delimiter.join("{:02x}".format(c) for c in data)
    return hexrep

def prettyhexrep(data):
    hexrep = "<"+"".join("{:02x}".format(c) for c in data)+">"
    return hexrep

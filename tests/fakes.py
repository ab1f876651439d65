from procnet_watch.models import ProcessEntry

SAMPLE_NETSTAT = """
Active Connections

  Proto  Local Address          Foreign Address        State           PID
  TCP    0.0.0.0:135            0.0.0.0:0              LISTENING       1028
  TCP    192.168.1.10:52314     140.82.112.4:443       ESTABLISHED     100
  TCP    [::]:445               [::]:0                 LISTENING       4
  TCP    [::1]:8080             [::1]:52000            TIME_WAIT       0
  UDP    0.0.0.0:5353           *:*                                    2200
  UDP    [fe80::1%4]:1900       *:*                                    2200
"""


class FakeProcesses:
    """In-memory process table: pid -> name."""

    def __init__(self, procs=None):
        self.procs = dict(procs or {})
        self.calls = []

    def exists(self, pid):
        self.calls.append(("exists", pid))
        return pid in self.procs

    def find_by_name(self, name):
        self.calls.append(("find_by_name", name))
        return [ProcessEntry(pid, n) for pid, n in self.procs.items() if n == name]

    def name_of(self, pid):
        self.calls.append(("name_of", pid))
        return self.procs.get(pid)


class FakeRegistry:
    def __init__(self, pools=None):
        self.pools = dict(pools or {})
        self.calls = []

    def find_pid(self, pool):
        self.calls.append(pool)
        return self.pools.get(pool)


class FakeLister:
    """Stands in for run_netstat; records every call."""

    def __init__(self, text=""):
        self.text = text
        self.calls = []

    def __call__(self, protocol, all_states, keywords):
        self.calls.append((protocol, all_states, keywords))
        return self.text

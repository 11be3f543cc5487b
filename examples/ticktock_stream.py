"""
Example: Time | Log Stream

This example builds the classic "ticktock" stream with the fluent DSL,
deploys it, checks its status and tears it down again.
"""

import os

from dataflow_streams import DataFlowClient, Stream, StreamApplication

def main():
    # Connect to the Data Flow server
    client = DataFlowClient(
        host=os.getenv("DATAFLOW_HOST", "localhost"),
        port=int(os.getenv("DATAFLOW_PORT", "9393")),
    )

    if not client.health_check():
        print("Data Flow server is not reachable")
        return

    time_source = StreamApplication("time").add_property("time-unit", "SECONDS")
    log_sink = StreamApplication("log").add_deployment_property("count", 2)

    stream = (Stream.builder(client)
              .name("ticktock")
              .source(time_source)
              .sink(log_sink)
              .create()
              .deploy())

    print(f"Deployed {stream.name}: {stream.definition}")
    print(f"Status: {stream.get_status()}")

    # Undeploy keeps the definition around so it can be deployed again
    stream_definition = stream.undeploy()
    stream = stream_definition.deploy()
    stream.destroy()
    print("Stream destroyed")


if __name__ == "__main__":
    main()

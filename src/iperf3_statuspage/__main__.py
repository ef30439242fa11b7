from iperf3_statuspage.cli import main

main()

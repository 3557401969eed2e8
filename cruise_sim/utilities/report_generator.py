import os
import datetime
import logging

logger = logging.getLogger(__name__)


class ReportGenerator:
    def __init__(self, output_dir="reports"):
        self.output_dir = output_dir
        if not os.path.exists(output_dir):
            os.makedirs(output_dir)

    @staticmethod
    def summarize(readouts):
        if not readouts:
            return {'ticks': 0, 'final_speed_kph': 0.0, 'max_speed_kph': 0.0, 'distance_km': 0.0}
        return {
            'ticks': len(readouts),
            'final_speed_kph': readouts[-1].speed_kph,
            'max_speed_kph': max(r.speed_kph for r in readouts),
            'distance_km': readouts[-1].distance_km,
        }

    def generate(self, test_name, readouts, result="PASS", every=1):
        """Write an HTML report of a run. ``every`` thins out the readout table."""
        now = datetime.datetime.now()
        timestamp = now.strftime("%Y-%m-%d %H:%M:%S")
        filename = os.path.join(self.output_dir, f"{test_name}_{now.strftime('%Y%m%d_%H%M%S')}.html")
        summary = self.summarize(readouts)

        html = f"""
        <html>
        <head>
            <style>
                body {{ font-family: sans-serif; padding: 20px; }}
                h1 {{ color: #333; }}
                .pass {{ color: green; }}
                .fail {{ color: red; }}
                table {{ border-collapse: collapse; width: 100%; margin-top: 20px; }}
                th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
                th {{ background-color: #f2f2f2; }}
                tr:nth-child(even) {{ background-color: #f9f9f9; }}
                .braking {{ background-color: #ffdddd; color: #a94442; }}
            </style>
        </head>
        <body>
            <h1>Simulation Report: {test_name}</h1>
            <p><strong>Time:</strong> {timestamp}</p>
            <p><strong>Result:</strong> <span class="{result.lower()}">{result}</span></p>
            <p><strong>Ticks:</strong> {summary['ticks']}</p>
            <p><strong>Final speed:</strong> {summary['final_speed_kph']:.1f} km/h</p>
            <p><strong>Max speed:</strong> {summary['max_speed_kph']:.1f} km/h</p>
            <p><strong>Distance:</strong> {summary['distance_km']:.3f} km</p>

            <h2>Readouts</h2>
            <table>
                <tr>
                    <th>Tick</th>
                    <th>Engine</th>
                    <th>Speed (km/h)</th>
                    <th>Throttle (%)</th>
                    <th>Brake (%)</th>
                    <th>Grade (deg)</th>
                    <th>Wind (km/h)</th>
                </tr>
        """

        for i, r in enumerate(readouts):
            if i % every:
                continue
            row_class = "braking" if r.brake > 0 else ""
            html += f"""
                <tr class="{row_class}">
                    <td>{i}</td>
                    <td>{r.engine.value}</td>
                    <td>{r.speed_kph:.2f}</td>
                    <td>{r.throttle:.1f}</td>
                    <td>{r.brake:.1f}</td>
                    <td>{r.gradient:.2f}</td>
                    <td>{r.wind_speed_kph:.1f}</td>
                </tr>
            """

        html += """
            </table>
        </body>
        </html>
        """

        with open(filename, "w") as f:
            f.write(html)

        logger.info("Report generated: %s", filename)
        return filename

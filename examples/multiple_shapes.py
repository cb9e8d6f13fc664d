from __future__ import annotations

from textplot import AxisStyle, Chart, Continuous, Lines


def main() -> None:
    print("y = -x^2; y = x^2")
    Chart.default().plot(Continuous(lambda x: -(x**2))).plot(Continuous(lambda x: x**2)).display()

    for offset in (-1.0, 1.0):
        sign = "+" if offset > 0 else "-"
        print(f"\nf(x)=x; f(x)=x{sign}1; f(x)=x{sign}2")
        ch = Chart(60, 20, xmin=-2.0, xmax=2.0)
        for k in range(3):
            ch.plot(Lines([(n, n + k * offset) for n in range(-2, 3)]))
        ch.set_x_axis_style(AxisStyle.DOTTED).nice()


if __name__ == "__main__":
    main()
